from fastapi import APIRouter
from vidtube.core.responses import ApiResponse, ok
from vidtube.modules.users.router import router as users_router
from vidtube.modules.videos.router import router as videos_router
from vidtube.modules.comments.router import router as comments_router
from vidtube.modules.likes.router import router as likes_router
from vidtube.modules.playlists.router import router as playlists_router
from vidtube.modules.subscriptions.router import router as subscriptions_router
from vidtube.modules.tweets.router import router as tweets_router
from vidtube.modules.dashboard.router import router as dashboard_router

api_router = APIRouter()
api_router.include_router(users_router, prefix="/users", tags=["users"])
api_router.include_router(videos_router, prefix="/videos", tags=["videos"])
api_router.include_router(comments_router, prefix="/comments", tags=["comments"])
api_router.include_router(likes_router, prefix="/likes", tags=["likes"])
api_router.include_router(playlists_router, prefix="/playlists", tags=["playlists"])
api_router.include_router(subscriptions_router, prefix="/subscriptions", tags=["subscriptions"])
api_router.include_router(tweets_router, prefix="/tweets", tags=["tweets"])
api_router.include_router(dashboard_router, prefix="/dashboard", tags=["dashboard"])

@api_router.get("/healthcheck", tags=["healthcheck"], response_model=ApiResponse[dict])
async def healthcheck():
    return ok({"status": "ok"}, "Health check passed")
