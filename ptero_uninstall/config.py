"""
Installation layout and naming constants.

Paths, service names and the scheduled task written by the Pterodactyl
installer. They must match the installer exactly.
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Tuple

PANEL_DIR = Path("/var/www/pterodactyl")
COMPOSER_BIN = Path("/usr/local/bin/composer")

# nginx site configuration; CentOS uses conf.d, everything else sites-*
NGINX_SITE_ENABLED = Path("/etc/nginx/sites-enabled/pterodactyl.conf")
NGINX_SITE_AVAILABLE = Path("/etc/nginx/sites-available/pterodactyl.conf")
NGINX_CONF_D = Path("/etc/nginx/conf.d/pterodactyl.conf")

PTEROQ_UNIT = Path("/etc/systemd/system/pteroq.service")
PHP_FPM_POOL = Path("/etc/php-fpm.d/www-pterodactyl.conf")

WINGS_CONFIG_DIR = Path("/etc/pterodactyl")
WINGS_BIN = Path("/usr/local/bin/wings")
WINGS_DATA_DIR = Path("/var/lib/pterodactyl")

# Services
DATABASE_SERVICE = "mariadb"
QUEUE_SERVICE = "pteroq"
PHP_FPM_SERVICE = "php-fpm"
CACHE_SERVICES = {
    "debian": "redis-server",
    "rhel": "redis",
}

CRON_ENTRY = "* * * * * php /var/www/pterodactyl/artisan schedule:run >> /dev/null 2>&1"

# Database
DEFAULT_DATABASE_NAME = "panel"
DEFAULT_DATABASE_USER = "pterodactyl"
DATABASE_USER_HOST = "127.0.0.1"
SKIP_SENTINEL = "none"

# Preflight
REQUIRED_TOOLS = ["curl"]


@dataclass(frozen=True)
class InstallLayout:
    """Filesystem locations touched by the uninstaller."""
    panel_dir: Path = PANEL_DIR
    composer_bin: Path = COMPOSER_BIN
    nginx_site_enabled: Path = NGINX_SITE_ENABLED
    nginx_site_available: Path = NGINX_SITE_AVAILABLE
    nginx_conf_d: Path = NGINX_CONF_D
    pteroq_unit: Path = PTEROQ_UNIT
    php_fpm_pool: Path = PHP_FPM_POOL
    wings_config_dir: Path = WINGS_CONFIG_DIR
    wings_bin: Path = WINGS_BIN
    wings_data_dir: Path = WINGS_DATA_DIR

    @classmethod
    def under(cls, root: Path) -> "InstallLayout":
        """Rebase every default path onto another root directory."""
        return cls(**{
            f.name: root / f.default.relative_to("/")
            for f in fields(cls)
        })

    def wings_paths(self) -> Tuple[Path, Path, Path]:
        """The three paths that make up a wings installation."""
        return (self.wings_config_dir, self.wings_bin, self.wings_data_dir)


DEFAULT_LAYOUT = InstallLayout()
