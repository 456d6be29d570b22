from models.user import User
from models.news import News
from models.game_class import GameClass
from models.media import Media
from models.faq import FAQ
from models.feature import Feature
from models.page import Page
from models.weapon import Weapon
from models.game_map import GameMap
from models.game_device import GameDevice
from models.game_mode import GameMode
from models.site_settings import SiteSettings, MAIN_SETTINGS_ID

__all__ = [
    "User",
    "News",
    "GameClass",
    "Media",
    "FAQ",
    "Feature",
    "Page",
    "Weapon",
    "GameMap",
    "GameDevice",
    "GameMode",
    "SiteSettings",
    "MAIN_SETTINGS_ID",
]
