"""Application ports - interfaces for external adapters."""

from mediagate.application.ports.access_checker import AccessChecker
from mediagate.application.ports.session_verifier import SessionVerifier
from mediagate.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "AccessChecker",
    "SessionVerifier",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
