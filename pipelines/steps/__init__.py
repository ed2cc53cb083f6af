# Namespace for pipeline steps
from .validate_request import ValidateRequest  # noqa: F401
from .extract_profile import ExtractProfile  # noqa: F401
from .persist_profile import PersistProfile  # noqa: F401
