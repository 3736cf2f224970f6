from .data_models import *  # noqa: F401,F403
from .data_models import __all__ as _model_names
from .exceptions import *  # noqa: F401,F403
from .exceptions import __all__ as _exception_names
from .achievement_collector import collect_achievements
from .credentials import generate_credential_identity, parse_credential_id, parse_verification_code

__all__ = list(_model_names) + list(_exception_names) + [
    "collect_achievements",
    "generate_credential_identity",
    "parse_credential_id",
    "parse_verification_code",
]
