from .files_models import FileStat, StoredFileInfo
from .sxcu_models import SXCU_FILENAME, SXCU_VERSION, SxcuConfig
from .upload_models import ErrorResponse, UploadResponse

__all__ = [
    "FileStat",
    "StoredFileInfo",
    "SxcuConfig",
    "SXCU_FILENAME",
    "SXCU_VERSION",
    "ErrorResponse",
    "UploadResponse",
]
