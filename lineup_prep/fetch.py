import hashlib
from pathlib import Path
import re
import requests
from requests.exceptions import RequestException
import shutil
import sys
from . import paths
from .csv_grid import strip_bom
from .errors import InputError

def is_url(source: str) -> bool:
    return re.match(r'https?://', source, re.IGNORECASE) is not None

def cache_file_for(url: str) -> Path:
    name = re.sub(r'^https?://', '', url, flags=re.IGNORECASE)
    name = re.sub(r'[^A-Za-z0-9_.-]+', '_', name).strip('_')
    digest = hashlib.sha1(url.encode('utf-8')).hexdigest()[:12]
    return Path(paths.DOWNLOADS_PATH, f'{name[-120:]}-{digest}.csv')

def fetch_csv(url: str, refresh: bool = False) -> str:
    """Downloads a CSV export (e.g. a published Google Sheets tab) and keeps a copy in the user cache.

    Progress goes to stderr since stdout may be carrying the generated JSON.
    """
    cached = cache_file_for(url)
    if cached.exists() and not refresh:
        print(f'Using cached copy of {url}...', file=sys.stderr)
        return strip_bom(cached.read_text(encoding='utf-8'))

    print(f'Downloading {url}...', file=sys.stderr)
    try:
        response = requests.get(url, timeout=30)
        response.raise_for_status()
    except RequestException as ex:
        raise InputError(f'Could not download CSV from {url}: {ex}') from ex

    # spreadsheet exports often omit the charset, which makes requests guess ISO-8859-1
    response.encoding = 'utf-8'
    text = strip_bom(response.text)

    cached.parent.mkdir(parents=True, exist_ok=True)
    cached.write_text(text, encoding='utf-8')

    return text

def clear_cache():
    if paths.CACHE_PATH.exists():
        shutil.rmtree(paths.CACHE_PATH)
        print(f'Removed {paths.CACHE_PATH}')
    else:
        print('Cache is already empty.')
