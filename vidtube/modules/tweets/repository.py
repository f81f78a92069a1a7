from vidtube.core.repository import Repository
from vidtube.modules.tweets.models import Tweet

class TweetRepository(Repository[Tweet]):
    model = Tweet
    label = "Tweet"
