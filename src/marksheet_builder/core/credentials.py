"""
CREDENTIAL IDENTITY - Marksheet numbers and verification links

FORMAT:
- Marksheet number:   MS-<year>-<first 8 chars of learner id, uppercased>
- Verification code:  marksheet number without "MS-" and without hyphens
- Verification URL:   <public base url>/verify/marksheet/code/<code>

The same (learner id, year) always gives the same identity, so a link shared
earlier in the year keeps working. There is no registry check: two learners
whose ids share the first 8 characters collide within a year.
"""

from typing import Optional
import logging

from .. import config
from .data_models import CredentialIdentity, CredentialLookup
from .exceptions import InvalidLearnerIdentity

logger = logging.getLogger(__name__)


def _validate_learner_id(learner_id) -> str:
    if not isinstance(learner_id, str) or not learner_id.strip():
        raise InvalidLearnerIdentity(learner_id)
    return learner_id


def _validate_year(year) -> int:
    if isinstance(year, bool) or not isinstance(year, int) or not 1000 <= year <= 9999:
        raise ValueError(f"Issue year must be a four-digit integer, got: {year!r}")
    return year


def make_credential_id(learner_id: str, year: int) -> str:
    learner_id = _validate_learner_id(learner_id)
    year = _validate_year(year)
    holder = learner_id[: config.CREDENTIAL_HOLDER_LENGTH].upper()
    return f"{config.CREDENTIAL_PREFIX}-{year}-{holder}"


def make_verification_code(credential_id: str) -> str:
    prefix = f"{config.CREDENTIAL_PREFIX}-"
    if credential_id.startswith(prefix):
        credential_id = credential_id[len(prefix):]
    return credential_id.replace("-", "")


def make_verification_url(verification_code: str, public_base_url: Optional[str] = None) -> str:
    base = (public_base_url or config.PUBLIC_BASE_URL).rstrip("/")
    return f"{base}{config.VERIFY_PATH}{verification_code}"


def generate_credential_identity(
    learner_id: str,
    year: int,
    public_base_url: Optional[str] = None,
) -> CredentialIdentity:
    """
    Derive the marksheet number and verification link for a learner

    Args:
        learner_id: Stable learner identifier (must be non-empty)
        year: Issue year
        public_base_url: Origin for the verification link (defaults to config)

    Returns:
        CredentialIdentity
    """
    credential_id = make_credential_id(learner_id, year)
    code = make_verification_code(credential_id)
    return CredentialIdentity(
        credential_id=credential_id,
        verification_code=code,
        verification_url=make_verification_url(code, public_base_url),
    )


def parse_credential_id(credential_id: str) -> CredentialLookup:
    """
    Parse a presented marksheet number for the public verify page

    A number is valid when it has the MS prefix, a four-digit year and a
    non-empty holder fragment. Parsing never raises.
    """
    credential_id = (credential_id or "").strip()
    parts = credential_id.split("-", 2)

    if len(parts) != 3 or parts[0] != config.CREDENTIAL_PREFIX:
        return CredentialLookup(credential_id=credential_id, is_valid=False)

    _, year, holder = parts
    if len(year) != 4 or not year.isdigit() or not holder:
        return CredentialLookup(credential_id=credential_id, is_valid=False)

    return CredentialLookup(
        credential_id=credential_id,
        is_valid=True,
        issue_year=int(year),
        holder_fragment=holder,
    )


def parse_verification_code(code: str) -> CredentialLookup:
    """Turn a compact verification code back into a marksheet lookup"""
    code = (code or "").strip().upper()
    if len(code) <= 4 or not code[:4].isdigit():
        logger.info(f"Rejected malformed verification code: {code!r}")
        return CredentialLookup(credential_id=code, is_valid=False)
    return parse_credential_id(f"{config.CREDENTIAL_PREFIX}-{code[:4]}-{code[4:]}")
