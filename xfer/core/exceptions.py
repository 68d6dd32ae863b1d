"""
Unified exception definitions
"""


class XferError(Exception):
    """Base exception class"""
    pass


class ConfigError(XferError):
    """Configuration error"""
    pass


class TransferError(XferError):
    """Transfer error"""
    pass


class ContractViolation(XferError):
    """
    Raised when a caller breaks the outcome lifecycle contract.

    Finalizing twice, finalizing with an inconsistent status/error pair,
    mutating a finalized outcome, or reading a result before finalization.
    """
    pass
