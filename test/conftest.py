import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def make_app(tmp_path: Path, name: str = "ledger.db", **settings):
    from posledger.application.container import build_container
    from posledger.config import LedgerSettings

    return build_container(tmp_path / name, settings=LedgerSettings(**settings))


def empty_store(app, name: str = "Empty Store", username: str = "empty1"):
    """A new store with no inventory records."""
    account = app.catalog.add_store({"name": name, "location": "Nowhere"}, {"username": username, "password": "pw"})
    return account.store
