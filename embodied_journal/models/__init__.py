# embodied_journal/models/__init__.py
# Central import registry for Alembic

from embodied_journal.models.user import User  # noqa: F401
from embodied_journal.models.trade import Trade  # noqa: F401
from embodied_journal.models.ritual import DailyRitual, MicroWin  # noqa: F401
