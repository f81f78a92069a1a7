import asyncio
import logging
import uuid
from pydantic import validate_email
from pydantic_core import PydanticCustomError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from vidtube.core.errors import Failure
from vidtube.core.passwords import hash_password, verify_password
from vidtube.core.security import Principal, create_access_token
from vidtube.modules.subscriptions.service import SubscriptionService
from vidtube.modules.users.models import User
from vidtube.modules.users.repository import UserRepository
from vidtube.modules.users.schemas import AccountUpdate, ChannelProfileOut
from vidtube.platform.media_gateway import MediaGateway, MediaKind, UploadResult
from vidtube.platform.staging import StagedFile

logger = logging.getLogger(__name__)

def _normalize_email(value: str) -> str | None:
    try:
        _, email = validate_email(value)
    except PydanticCustomError:
        return None
    return email.lower()

class UserService:
    def __init__(self, session: AsyncSession, gateway: MediaGateway):
        self.session = session
        self.gateway = gateway
        self.repo = UserRepository(session)

    async def register(
        self,
        *,
        username: str | None,
        email: str | None,
        full_name: str | None,
        password: str | None,
        avatar: StagedFile | None,
        cover_image: StagedFile | None = None,
    ) -> tuple[User | None, Failure | None]:
        try:
            fields = {"username": username, "email": email, "fullName": full_name, "password": password}
            missing = [k for k, v in fields.items() if not (v or "").strip()]
            if missing:
                return None, Failure.validation("All fields are required", *[f"{k} is required" for k in missing])
            normalized_email = _normalize_email(email.strip())
            if normalized_email is None:
                return None, Failure.validation("Invalid email address")
            if avatar is None or not avatar.exists():
                return None, Failure.validation("Avatar file is required")
            if await self.repo.exists_with(username=username.strip(), email=normalized_email):
                return None, Failure.conflict("User with email or username already exists")
            password_hash = await asyncio.to_thread(hash_password, password)

            uploaded: list[UploadResult] = []
            avatar_up, err = await self.gateway.upload(avatar, MediaKind.IMAGE)
            if err:
                return None, err
            uploaded.append(avatar_up)
            cover_up = None
            if cover_image is not None:
                cover_up, err = await self.gateway.upload(cover_image, MediaKind.IMAGE)
                if err:
                    await self.gateway.rollback(uploaded)
                    return None, err
                uploaded.append(cover_up)

            try:
                obj = await self.repo.create(
                    username=username.strip().lower(),
                    email=normalized_email,
                    full_name=full_name.strip(),
                    password_hash=password_hash,
                    avatar=avatar_up.external_ref,
                    cover_image=cover_up.external_ref if cover_up else None,
                )
                await self.session.commit()
            except IntegrityError:
                await self.session.rollback()
                await self.gateway.rollback(uploaded)
                return None, Failure.conflict("User with email or username already exists")
            except SQLAlchemyError as e:
                await self.session.rollback()
                await self.gateway.rollback(uploaded)
                return None, Failure.upstream("Something went wrong while registering the user", cause=e)

            logger.info(f"User {obj.id} registered as {obj.username}")
            return obj, None
        finally:
            for staged in (avatar, cover_image):
                if staged is not None:
                    staged.discard()

    async def login(self, identifier: str | None, password: str) -> tuple[tuple[User, str] | None, Failure | None]:
        if not (identifier or "").strip():
            return None, Failure.validation("Username or email is required")
        obj = await self.repo.get_by_login(identifier)
        if obj is None or not await asyncio.to_thread(verify_password, password, obj.password_hash):
            return None, Failure.unauthorized("Invalid user credentials")
        return (obj, create_access_token(obj.id, obj.username)), None

    async def get(self, user_id: uuid.UUID) -> tuple[User | None, Failure | None]:
        return await self.repo.get_or_fail(user_id)

    async def update_account(self, principal: Principal, payload: AccountUpdate) -> tuple[User | None, Failure | None]:
        if payload.full_name is None and payload.email is None:
            return None, Failure.validation("At least one field (fullName or email) is required")
        obj, err = await self.repo.get_or_fail(principal.user_id)
        if err:
            return None, err
        try:
            await self.repo.update(
                obj,
                full_name=payload.full_name.strip() if payload.full_name else None,
                email=str(payload.email).lower() if payload.email else None,
            )
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            return None, Failure.conflict("Email is already in use")
        return obj, None

    async def update_avatar(self, principal: Principal, avatar: StagedFile | None) -> tuple[User | None, Failure | None]:
        try:
            if avatar is None or not avatar.exists():
                return None, Failure.validation("Avatar file is missing")
            obj, err = await self.repo.get_or_fail(principal.user_id)
            if err:
                return None, err
            uploaded, err = await self.gateway.upload(avatar, MediaKind.IMAGE)
            if err:
                return None, err
            previous = obj.avatar
            try:
                await self.repo.update(obj, avatar=uploaded.external_ref)
                await self.session.commit()
            except SQLAlchemyError as e:
                await self.session.rollback()
                await self.gateway.rollback([uploaded])
                return None, Failure.upstream("Failed to update avatar", cause=e)
            _, err = await self.gateway.delete(previous, MediaKind.IMAGE)
            if err:
                logger.warning(f"Previous avatar {previous} not removed: {err.message}")
            return obj, None
        finally:
            if avatar is not None:
                avatar.discard()

    async def channel_profile(self, username: str, principal: Principal) -> tuple[ChannelProfileOut | None, Failure | None]:
        if not username.strip():
            return None, Failure.validation("Username is missing")
        obj = await self.repo.get_by_username(username.strip())
        if obj is None:
            return None, Failure.not_found("Channel does not exist")
        subs = SubscriptionService(self.session)
        subscribers, subscribed_to = await subs.counts(obj.id)
        return ChannelProfileOut(
            id=obj.id,
            username=obj.username,
            full_name=obj.full_name,
            avatar=obj.avatar,
            cover_image=obj.cover_image,
            subscribers_count=subscribers,
            channels_subscribed_to_count=subscribed_to,
            is_subscribed=await subs.is_subscribed(obj.id, principal.user_id),
        ), None
