BOT_NAME = "PUBG Discord Bot"
FOOTER_TEXT = BOT_NAME

# Embed colors
COLOR_ERROR = 0xE74C3C
COLOR_SUCCESS = 0x27AE60
COLOR_WARNING = 0xF39C12
COLOR_INFO = 0x3498DB

# Registration modal
REGISTER_MODAL_ID = "pubg_register_modal"
REGISTER_MODAL_TITLE = "Register PUBG Player"
PLAYER_NAME_INPUT_ID = "pubg_player_name"
PLAYER_NAME_MAX_LENGTH = 100

SPACER = "\u200b"
RANK_MEDALS = {1: "🥇", 2: "🥈", 3: "🥉"}
DEFAULT_RANK_MEDAL = "🏅"

# Internal PUBG map names as they appear in match data
MAP_DISPLAY_NAMES = {
    "Baltic_Main": "Erangel",
    "Erangel_Main": "Erangel (Classic)",
    "Desert_Main": "Miramar",
    "Savage_Main": "Sanhok",
    "DihorOtok_Main": "Vikendi",
    "Summerland_Main": "Karakin",
    "Chimera_Main": "Paramo",
    "Heaven_Main": "Haven",
    "Tiger_Main": "Taego",
    "Kiki_Main": "Deston",
    "Neon_Main": "Rondo",
    "Range_Main": "Camp Jackal",
}


def get_map_display_name(map_name: str | None) -> str:
    if not map_name:
        return "Unknown Map"
    return MAP_DISPLAY_NAMES.get(map_name, map_name)
