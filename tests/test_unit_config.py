"""
Unit tests for ptero_uninstall/config.py.

Tests the installation layout and the installer's fixed names.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from ptero_uninstall import config
from ptero_uninstall.config import InstallLayout


class TestInstallLayout:
    """Tests for InstallLayout."""

    def test_default_paths(self):
        layout = config.DEFAULT_LAYOUT

        assert layout.panel_dir == Path("/var/www/pterodactyl")
        assert layout.composer_bin == Path("/usr/local/bin/composer")
        assert layout.nginx_conf_d == Path("/etc/nginx/conf.d/pterodactyl.conf")
        assert layout.pteroq_unit == Path("/etc/systemd/system/pteroq.service")
        assert layout.php_fpm_pool == Path("/etc/php-fpm.d/www-pterodactyl.conf")

    def test_wings_paths(self):
        assert config.DEFAULT_LAYOUT.wings_paths() == (
            Path("/etc/pterodactyl"),
            Path("/usr/local/bin/wings"),
            Path("/var/lib/pterodactyl"),
        )

    def test_under_rebases_every_path(self, tmp_path):
        layout = InstallLayout.under(tmp_path)

        assert layout.panel_dir == tmp_path / "var" / "www" / "pterodactyl"
        assert layout.nginx_site_enabled == tmp_path / "etc" / "nginx" / "sites-enabled" / "pterodactyl.conf"
        assert layout.wings_data_dir == tmp_path / "var" / "lib" / "pterodactyl"

    def test_frozen(self):
        with pytest.raises(AttributeError):
            config.DEFAULT_LAYOUT.panel_dir = Path("/srv/panel")


class TestConstants:
    """Tests for names shared with the installer."""

    def test_cron_entry(self):
        assert config.CRON_ENTRY == "* * * * * php /var/www/pterodactyl/artisan schedule:run >> /dev/null 2>&1"

    def test_cache_services(self):
        assert config.CACHE_SERVICES == {"debian": "redis-server", "rhel": "redis"}

    def test_skip_sentinel(self):
        assert config.SKIP_SENTINEL == "none"
