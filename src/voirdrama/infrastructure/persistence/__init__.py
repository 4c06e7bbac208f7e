from .external_id_index import ExternalIdIndex

__all__ = ["ExternalIdIndex"]
