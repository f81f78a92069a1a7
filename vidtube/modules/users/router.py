from fastapi import APIRouter, Depends, File, Form, Response, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
from vidtube.core.config import settings
from vidtube.core.db import get_session
from vidtube.core.errors import raise_for
from vidtube.core.responses import ApiResponse, ok
from vidtube.core.security import get_principal, Principal
from vidtube.modules.users.schemas import AccountUpdate, ChannelProfileOut, LoginIn, LoginOut, UserOut
from vidtube.modules.users.service import UserService
from vidtube.platform.media_gateway import MediaGateway
from vidtube.platform.provider_registry import get_media_gateway
from vidtube.platform.staging import StagingArea

router = APIRouter()

def svc(session: AsyncSession = Depends(get_session), gateway: MediaGateway = Depends(get_media_gateway)) -> UserService:
    return UserService(session, gateway)

@router.post("/register", status_code=201, response_model=ApiResponse[UserOut])
async def register_user(
    username: str | None = Form(None),
    email: str | None = Form(None),
    full_name: str | None = Form(None, alias="fullName"),
    password: str | None = Form(None),
    avatar: UploadFile | None = File(None),
    cover_image: UploadFile | None = File(None, alias="coverImage"),
    service: UserService = Depends(svc),
):
    async with StagingArea() as staging:
        staged_avatar = await staging.stage(avatar)
        staged_cover = await staging.stage(cover_image)
        obj, err = await service.register(
            username=username,
            email=email,
            full_name=full_name,
            password=password,
            avatar=staged_avatar,
            cover_image=staged_cover,
        )
    raise_for(err)
    return ok(UserOut.model_validate(obj), "User registered successfully", 201)

@router.post("/login", response_model=ApiResponse[LoginOut])
async def login_user(payload: LoginIn, response: Response, service: UserService = Depends(svc)):
    result, err = await service.login(payload.username or payload.email, payload.password)
    raise_for(err)
    user, token = result
    response.set_cookie(
        settings.ACCESS_TOKEN_COOKIE,
        token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    return ok(LoginOut(user=UserOut.model_validate(user), access_token=token), "User logged in successfully")

@router.post("/logout", response_model=ApiResponse[None])
async def logout_user(response: Response, principal: Principal = Depends(get_principal)):
    response.delete_cookie(settings.ACCESS_TOKEN_COOKIE)
    return ok(None, "User logged out")

@router.get("/current-user", response_model=ApiResponse[UserOut])
async def current_user(principal: Principal = Depends(get_principal), service: UserService = Depends(svc)):
    obj, err = await service.get(principal.user_id)
    raise_for(err)
    return ok(UserOut.model_validate(obj), "Current user fetched successfully")

@router.patch("/update-account", response_model=ApiResponse[UserOut])
async def update_account(
    payload: AccountUpdate,
    principal: Principal = Depends(get_principal),
    service: UserService = Depends(svc),
):
    obj, err = await service.update_account(principal, payload)
    raise_for(err)
    return ok(UserOut.model_validate(obj), "Account details updated successfully")

@router.patch("/avatar", response_model=ApiResponse[UserOut])
async def update_avatar(
    avatar: UploadFile | None = File(None),
    principal: Principal = Depends(get_principal),
    service: UserService = Depends(svc),
):
    async with StagingArea() as staging:
        staged = await staging.stage(avatar)
        obj, err = await service.update_avatar(principal, staged)
    raise_for(err)
    return ok(UserOut.model_validate(obj), "Avatar updated successfully")

@router.get("/c/{username}", response_model=ApiResponse[ChannelProfileOut])
async def get_channel_profile(
    username: str,
    principal: Principal = Depends(get_principal),
    service: UserService = Depends(svc),
):
    profile, err = await service.channel_profile(username, principal)
    raise_for(err)
    return ok(profile, "User channel fetched successfully")
