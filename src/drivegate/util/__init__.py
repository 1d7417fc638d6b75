from .mime import DEFAULT_MIME, resolve_upload_mime

__all__ = [
    "DEFAULT_MIME",
    "resolve_upload_mime",
]
