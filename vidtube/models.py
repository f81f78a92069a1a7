# Import every module's models so Base.metadata knows all tables.
from vidtube.modules.users.models import User  # noqa: F401
from vidtube.modules.videos.models import Video  # noqa: F401
from vidtube.modules.comments.models import Comment  # noqa: F401
from vidtube.modules.likes.models import Like  # noqa: F401
from vidtube.modules.subscriptions.models import Subscription  # noqa: F401
from vidtube.modules.tweets.models import Tweet  # noqa: F401
from vidtube.modules.playlists.models import Playlist, PlaylistVideo  # noqa: F401
