from typing import List

import email_validator
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.notification_service import EmailMessage, INotificationService
from src.app.services.password_hasher import PasswordHasher
from src.depends import (
    get_notification_service,
    get_password_hasher,
    get_session,
    get_unit_of_work,
)

# Accept reserved test domains such as user@x.test in request payloads
email_validator.TEST_ENVIRONMENT = True

FAST_HASHER = PasswordHasher(rounds=4)


class RecordingNotificationService(INotificationService):
    def __init__(self):
        self.sent: List[EmailMessage] = []

    async def send(self, message: EmailMessage) -> None:
        self.sent.append(message)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def outbox():
    return RecordingNotificationService()


@pytest_asyncio.fixture
async def app(session_factory, outbox):
    from src.api.app import create_app

    app = create_app(ApplicationConfig)

    # One database session per request, like production
    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_password_hasher] = lambda: FAST_HASHER
    app.dependency_overrides[get_notification_service] = lambda: outbox
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
