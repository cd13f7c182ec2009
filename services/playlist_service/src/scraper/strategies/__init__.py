"""Per-source extraction strategies."""

from .lastfm import LastFmStrategy
from .pitchfork import PitchforkStrategy
from .rateyourmusic import RateYourMusicStrategy
from .reddit import RedditStrategy
from .webpage import WebPageStrategy
from .youtube import YouTubeStrategy

__all__ = [
    "LastFmStrategy",
    "PitchforkStrategy",
    "RateYourMusicStrategy",
    "RedditStrategy",
    "WebPageStrategy",
    "YouTubeStrategy",
]
