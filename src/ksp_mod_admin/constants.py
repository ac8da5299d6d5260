"""Project-wide constants and configuration defaults."""

APP_NAME = "KSPModAdmin"
APP_VERSION = "0.1.0"

# Sent with every scrape / download request
USER_AGENT = f"{APP_NAME}/{APP_VERSION} (+https://github.com/{APP_NAME})"

# Environment override for the data directory (settings, mod selection, logs)
HOME_ENV_VAR = "KSP_MOD_ADMIN_HOME"

SETTINGS_FILE = "settings.json"
MODS_FILE = "mods.json"
LOG_FILE = "ksp_mod_admin.log"
DOWNLOADS_DIR = "downloads"

# Folder inside a mod archive that maps onto the KSP install root
GAMEDATA_FOLDER = "GameData"

HTTP_TIMEOUT_S = 15.0
DOWNLOAD_TIMEOUT_S = 30.0

# CKAN metadata
CKAN_DEFAULT_REPO_URL = "https://github.com/KSP-CKAN/CKAN-meta/archive/master.tar.gz"
CKAN_REPOSITORY_LIST_URL = (
    "https://raw.githubusercontent.com/KSP-CKAN/CKAN-meta/master/repositories.json"
)
