from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Time,
    Uuid,
)
from sqlalchemy.sql import func

from embodied_journal.db.database import Base


class Trade(Base):
    __tablename__ = "trades"
    __table_args__ = (
        CheckConstraint(
            "embodiment_rating BETWEEN 1 AND 10",
            name="ck_trades_embodiment_rating_range",
        ),
        CheckConstraint("entry >= 0", name="ck_trades_entry_non_negative"),
        CheckConstraint("exit >= 0", name="ck_trades_exit_non_negative"),
        CheckConstraint("position_size >= 0", name="ck_trades_position_size_non_negative"),
    )

    id = Column(Integer, primary_key=True)

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    date = Column(Date, nullable=False, index=True)
    time = Column(Time, nullable=False)

    asset = Column(String(32), nullable=False)

    entry = Column(Numeric(18, 8, asdecimal=False), nullable=False)
    exit = Column(Numeric(18, 8, asdecimal=False), nullable=False)
    position_size = Column(Numeric(18, 8, asdecimal=False), nullable=False)

    # Derived at submission: (exit - entry) * position_size
    pnl = Column(Numeric(18, 8, asdecimal=False), nullable=True)

    # Plain strings so labels written by older clients still aggregate
    identity_state = Column(String(64), nullable=True)
    embodiment_rating = Column(Integer, nullable=False)
    beliefs_influence = Column(Text, nullable=True)
    nervous_system_state = Column(String(32), nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
