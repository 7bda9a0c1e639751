class DomainError(Exception):
    """Base class for all wallet domain errors."""


class InvalidAmount(DomainError, ValueError):
    """Amount is not a number or is negative."""


class InsufficientBalance(DomainError):
    def __init__(self, message: str = "Insufficient balance on bank account!") -> None:
        super().__init__(message)


class InsufficientAmount(DomainError):
    def __init__(self, message: str = "Insufficient amount of crypto in wallet!") -> None:
        super().__init__(message)


class WalletError(DomainError):
    """Unknown or duplicate wallet."""


class PriceUnavailable(DomainError):
    """Current price for a currency could not be obtained."""


class DataStoreError(DomainError):
    pass


class SaveData(DataStoreError):
    pass


class RetrieveData(DataStoreError):
    pass
