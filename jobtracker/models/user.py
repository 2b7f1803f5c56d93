from sqlalchemy import CheckConstraint, Column, Integer, String
from sqlalchemy.orm import relationship

from ..database import Base


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("length(name) >= 3 AND length(name) <= 50", name="ck_users_name_length"),
        CheckConstraint("email LIKE '%@%.%'", name="ck_users_email_shape"),
        CheckConstraint("length(password) >= 6", name="ck_users_password_length"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # store hashed password

    # Rows are removed by the database (ON DELETE CASCADE), not by the ORM.
    jobs = relationship("Job", back_populates="owner", passive_deletes=True)
