"""
models/revoked_session.py
-------------------------
Blacklist of explicitly terminated sessions.

Session tokens are stateless; logging out records the token's jti here until
the token would have expired anyway. Rows past expires_at can be purged.
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from managerh.db.base import Base, TimestampMixin, generate_uuid


class RevokedSession(Base, TimestampMixin):
    __tablename__ = "revoked_sessions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    jti: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )

    def __repr__(self) -> str:
        return f"<RevokedSession jti={self.jti[:8]}...>"
