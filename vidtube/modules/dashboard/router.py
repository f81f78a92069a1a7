from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from vidtube.core.db import get_session
from vidtube.core.errors import raise_for
from vidtube.core.responses import ApiResponse, ok
from vidtube.core.security import get_principal, Principal
from vidtube.modules.dashboard.schemas import ChannelStatsOut
from vidtube.modules.dashboard.service import DashboardService
from vidtube.modules.videos.schemas import VideoOut

router = APIRouter()

def svc(session: AsyncSession = Depends(get_session)) -> DashboardService:
    return DashboardService(session)

@router.get("/stats", response_model=ApiResponse[ChannelStatsOut])
async def get_channel_stats(principal: Principal = Depends(get_principal), service: DashboardService = Depends(svc)):
    stats, err = await service.channel_stats(principal)
    raise_for(err)
    return ok(stats, "Channel stats fetched successfully")

@router.get("/videos", response_model=ApiResponse[list[VideoOut]])
async def get_channel_videos(principal: Principal = Depends(get_principal), service: DashboardService = Depends(svc)):
    videos = await service.channel_videos(principal)
    return ok([VideoOut.model_validate(v) for v in videos], "Channel videos fetched successfully")
