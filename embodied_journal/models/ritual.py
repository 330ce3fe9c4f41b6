from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.sql import func

from embodied_journal.db.database import Base


# -------------------------
# DAILY RITUAL
# -------------------------
class DailyRitual(Base):
    __tablename__ = "daily_rituals"
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_daily_rituals_user_date"),
        CheckConstraint(
            "embodiment_score IS NULL OR embodiment_score BETWEEN 0 AND 10",
            name="ck_daily_rituals_embodiment_score_range",
        ),
    )

    id = Column(Integer, primary_key=True)

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    date = Column(Date, nullable=False)

    embodiment_score = Column(Integer, nullable=True)

    intention = Column(Text, nullable=True)
    reflection = Column(Text, nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )


# -------------------------
# MICRO WINS
# -------------------------
class MicroWin(Base):
    __tablename__ = "micro_wins"

    id = Column(Integer, primary_key=True)

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    date = Column(Date, nullable=False)
    description = Column(Text, nullable=False)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
