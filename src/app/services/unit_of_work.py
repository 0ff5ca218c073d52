from abc import ABC, abstractmethod

from src.app.repositories.account_repository import IAccountRepository
from src.app.repositories.movie_repository import IMovieRepository
from src.app.repositories.password_reset_otp_repository import IPasswordResetOtpRepository
from src.app.repositories.refresh_token_repository import IRefreshTokenRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    accounts: IAccountRepository
    refresh_tokens: IRefreshTokenRepository
    password_reset_otps: IPasswordResetOtpRepository
    movies: IMovieRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
