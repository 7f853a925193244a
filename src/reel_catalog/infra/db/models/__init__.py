from reel_catalog.infra.db.models.base import Base
from reel_catalog.infra.db.models.movie import MovieRow

__all__ = ["Base", "MovieRow"]
