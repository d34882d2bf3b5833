import logging

from libs.result import Error, Result, Return

from src.app.services.password_hasher import PasswordHasher
from src.app.services.token_issuer import TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User, UserRole
from .register_dto import AuthResponse, RegisterCommand
from .session_support import build_auth_response, start_session
from .validation import normalize_email, validate_password

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand (validated business intent)
    - Output: Result[AuthResponse] (structured response)

    Business Logic:
    1. Validate password length
    2. Check if email already exists, case-insensitive (EMAIL_ALREADY_EXISTS)
    3. Hash password with bcrypt
    4. Create User with role=CLIENT, is_active=True
    5. Issue access/refresh token pair and persist the refresh session
    6. Commit transaction atomically
    7. Return AuthResponse (user without password + tokens)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        password_hasher: PasswordHasher,
        token_issuer: TokenIssuer,
    ):
        self.uow = uow
        self.password_hasher = password_hasher
        self.token_issuer = token_issuer

    async def execute(self, command: RegisterCommand) -> Result[AuthResponse]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with email, password and profile names

        Returns:
            Result[AuthResponse] with user data and tokens,
            or Error(VALIDATION_ERROR / EMAIL_ALREADY_EXISTS)
        """
        validation = validate_password(command.password)
        if validation.is_err():
            return Return.err(validation.error)

        email = normalize_email(command.email)

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(email)
            if existing_user:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "Email already registered")
                )

            user = User(
                email=email,
                password_hash=self.password_hasher.hash(command.password),
                first_name=command.first_name,
                last_name=command.last_name,
                phone=command.phone,
                role=UserRole.client,
                is_active=True,
            )
            await self.uow.users.create(user)

            pair = await start_session(self.uow, self.token_issuer, user)

            await self.uow.commit()

            logger.info(f"User registered: {user.id}")
            return Return.ok(build_auth_response(user, pair))
