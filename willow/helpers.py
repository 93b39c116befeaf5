"""
Helper Functions
"""
from willow.defaults import DEFAULT_ASSETS_DIST, DEFAULT_ASSETS_PATH
from willow.support import Config, Mode


def asset(name: str, dist: bool = False) -> str:
    """
    Generate URL for a web asset

    Deployed applications always use the minified js/css found under
    the dist directory.

    Example:
        asset('app.js')              # '/assets/app.js' in dev
        asset('app.css', dist=True)  # '/assets/dist/app.css'
    """
    base = Config.get('app.base', '')
    assets_path = Config.get('app.assets_path', DEFAULT_ASSETS_PATH)
    name = name.lstrip('/')

    if dist or (Mode.is_deployed() and name.endswith(('js', 'css'))):
        return f"{base}{assets_path}/{DEFAULT_ASSETS_DIST}/{name}"
    return f"{base}{assets_path}/{name}"
