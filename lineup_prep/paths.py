from pathlib import Path
import platformdirs

APP_NAME = 'Festival-Lineup-Prep'
CACHE_PATH = platformdirs.user_cache_path(APP_NAME)
DOWNLOADS_PATH = Path(CACHE_PATH, 'downloads')
