from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, false, func
from taskapi.database import Base

class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True)
    # deleting a user removes its tasks; enforced by the database, not the app
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(255), nullable=False)
    done = Column(Boolean, nullable=False, default=False, server_default=false())
    created_at = Column(DateTime, server_default=func.now())
