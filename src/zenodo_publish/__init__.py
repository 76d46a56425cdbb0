from .config import ConfigService
from .errors import (
    ApiError,
    ConfigError,
    NoSuchFile,
    TokenMissing,
    TransportError,
    UploadRejected,
    ZenodoError,
)
from .files import FileService, PhysicalFile
from .zenodo import (
    DepositionFailure,
    DepositionSuccess,
    Environment,
    RequestSpec,
    UploadOutcome,
    ZenodoAPI,
)
