"""
Panel database teardown.

Talks to the MariaDB/MySQL server through the `mysql` command line client,
lets the operator pick the panel database and user, then drops them.
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from . import config
from . import ui
from . import utils

# Module logger
_logger = logging.getLogger(__name__)

CLIENT_TIMEOUT = 60

SYSTEM_SCHEMAS = {"information_schema", "performance_schema", "mysql", "sys"}

# Accounts owned by the server itself
ADMIN_USERS = {
    "root",
    "mariadb.sys",
    "mysql.sys",
    "mysql.session",
    "mysql.infoschema",
    "debian-sys-maint",
}


class DatabaseError(RuntimeError):
    """The database client reported a failure."""


@dataclass(frozen=True)
class DatabaseTarget:
    """Database and user chosen for deletion; either may be the skip sentinel."""
    database_name: str
    database_user: str

    @property
    def drops_database(self) -> bool:
        return self.database_name != config.SKIP_SENTINEL

    @property
    def drops_user(self) -> bool:
        return self.database_user != config.SKIP_SENTINEL


def quote_identifier(name: str) -> str:
    """Quote a schema name for SQL."""
    return "`" + name.replace("`", "``") + "`"


def quote_string(value: str) -> str:
    """Quote a string literal for SQL."""
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


class MySQLClient:
    """
    Runs statements through the mysql client as an administrative user.

    The password is handed to the client in a private option file that only
    exists while the client is open.
    """

    def __init__(self, password: str, user: str = "root", binary: str = "mysql"):
        self.user = user
        self.binary = binary
        self._password = password
        self._options_file: Optional[Path] = None

    def __enter__(self) -> "MySQLClient":
        fd, name = tempfile.mkstemp(prefix="ptero-uninstall-", suffix=".cnf")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write("[client]\n")
            f.write(f"user={self.user}\n")
            escaped = self._password.replace("\\", "\\\\").replace('"', '\\"')
            f.write(f"password=\"{escaped}\"\n")
        self._options_file = Path(name)
        return self

    def __exit__(self, *exc_info) -> None:
        if self._options_file is not None:
            utils.remove_path(self._options_file)
            self._options_file = None

    def _base_command(self) -> List[str]:
        if self._options_file is None:
            raise DatabaseError("Database client used outside of its context")
        return [self.binary, f"--defaults-extra-file={self._options_file}"]

    def execute(self, sql: str) -> str:
        """Run one statement and return its raw tab-separated output."""
        cmd = self._base_command() + ["--batch", "--skip-column-names", "-e", sql]
        code, stdout, stderr = utils.run_command(cmd, timeout=CLIENT_TIMEOUT)
        if code != 0:
            _logger.warning(f"mysql failed ({code}) on: {sql}")
            raise DatabaseError(stderr.strip() or f"mysql exited with status {code}")
        return stdout

    def query_column(self, sql: str) -> List[str]:
        """Run a query and return the first column of every row."""
        rows = []
        for line in self.execute(sql).splitlines():
            if line.strip():
                rows.append(line.split("\t")[0].strip())
        return rows

    def list_databases(self) -> List[str]:
        """Existing schemas without the server's own."""
        schemas = self.query_column("SELECT schema_name FROM information_schema.schemata;")
        return [s for s in schemas if s not in SYSTEM_SCHEMAS]

    def list_users(self) -> List[str]:
        """Existing accounts without administrative ones."""
        users = self.query_column("SELECT DISTINCT user FROM mysql.user;")
        return [u for u in users if u and u not in ADMIN_USERS]

    def drop_database(self, name: str) -> None:
        self.execute(f"DROP DATABASE {quote_identifier(name)};")

    def drop_user(self, name: str, host: str = config.DATABASE_USER_HOST) -> None:
        self.execute(f"DROP USER {quote_string(name)}@{quote_string(host)};")

    def flush_privileges(self) -> None:
        self.execute("FLUSH PRIVILEGES;")


def choose_name(
    candidates: List[str],
    conventional: str,
    kind: str,
    reader: Optional[ui.Reader] = None,
) -> str:
    """
    Let the operator pick one of the candidates, or the skip sentinel.

    The conventional name is offered first when it exists. Otherwise the
    candidates are listed and the prompt repeats until a listed name or
    the sentinel is typed.
    """
    if conventional in candidates:
        if ui.prompt_yes_no(
            f"{kind.capitalize()} called {conventional} has been detected. "
            f"Is it the pterodactyl {kind}?",
            reader=reader,
        ):
            return conventional

    ui.print_list(candidates)

    while True:
        answer = ui.prompt_text(
            f"Choose the panel {kind} (to skip type {config.SKIP_SENTINEL})",
            reader=reader,
        )
        if answer == config.SKIP_SENTINEL or answer in candidates:
            return answer
        ui.print_info(f"'{answer}' is not an existing {kind}.")


def resolve_target(client: MySQLClient, reader: Optional[ui.Reader] = None) -> DatabaseTarget:
    """Ask the operator which database and user belong to the panel."""
    databases = client.list_databases()
    ui.print_warning("Be careful! This database will be deleted!")
    database_name = choose_name(databases, config.DEFAULT_DATABASE_NAME, "database", reader)

    users = client.list_users()
    ui.print_warning("Be careful! This user will be deleted!")
    database_user = choose_name(users, config.DEFAULT_DATABASE_USER, "user", reader)

    return DatabaseTarget(database_name=database_name, database_user=database_user)


def apply_target(client: MySQLClient, target: DatabaseTarget) -> None:
    """Drop the chosen database and user, then reload grants."""
    if target.drops_database:
        client.drop_database(target.database_name)
        ui.print_success(f"Dropped database {target.database_name}")
    if target.drops_user:
        client.drop_user(target.database_user)
        ui.print_success(f"Dropped user {target.database_user}")
    client.flush_privileges()


def remove_database(
    reader: Optional[ui.Reader] = None,
    password: Optional[str] = None,
) -> DatabaseTarget:
    """
    Database teardown for the panel.

    Prompts for the root password unless one is given. Client failures
    raise DatabaseError and are not retried.
    """
    if password is None:
        password = ui.prompt_password("Database root password")

    with MySQLClient(password) as client:
        target = resolve_target(client, reader)
        apply_target(client, target)
    return target
