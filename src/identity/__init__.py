"""Verification of identity assertions issued by third-party identity providers."""

import constants
from configuration import configuration
from identity.firebase import FirebaseIdentityVerifier
from identity.interface import IdentityVerifier
from identity.noop import NoopIdentityVerifier
from log import get_logger

logger = get_logger(__name__)


def get_identity_verifier() -> IdentityVerifier:
    """Select the configured identity verifier."""
    identity_configuration = configuration.identity_configuration
    module = identity_configuration.module

    logger.debug("Initializing identity verifier: module='%s'", module)

    match module:
        case constants.IDENTITY_MOD_FIREBASE:
            return FirebaseIdentityVerifier(
                identity_configuration.firebase_configuration,
                timeout=identity_configuration.timeout,
            )
        case constants.IDENTITY_MOD_NOOP:
            return NoopIdentityVerifier()
        case _:
            err_msg = f"Unsupported identity module '{module}'"
            logger.error(err_msg)
            raise ValueError(err_msg)
