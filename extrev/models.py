import uuid

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_slug():
    """Generate a unique public slug so routes never expose integer ids"""
    return str(uuid.uuid4())


# Entity type ids shared by list views, subscriptions and the feed
ENTITY_TYPE_USER = 1
ENTITY_TYPE_ADMIN = 2
ENTITY_TYPE_SUBADMIN = 3
ENTITY_TYPE_CONSULTANT = 4
ENTITY_TYPE_LOCATION = 5
ENTITY_TYPE_CONSULT = 6
ENTITY_TYPE_CLIENT = 7

# User types
USER_TYPE_ADMIN = 1
USER_TYPE_SUBADMIN = 2
USER_TYPE_REGULAR = 3
USER_TYPE_GUEST = 4


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    slug = Column(String(36), unique=True, nullable=False, index=True, default=generate_slug)
    username = Column(String(64), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    user_type_id = Column(Integer, default=USER_TYPE_REGULAR, nullable=False)
    avatar_path = Column(String(500), nullable=True)

    # Subadmin contact details
    address_one = Column(String(255), nullable=True)
    address_two = Column(String(64), nullable=True)
    city = Column(String(64), nullable=True)
    state = Column(String(2), nullable=True)
    zip = Column(String(10), nullable=True)
    primary_phone = Column(String(20), nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())

    sessions = relationship("UserSession", back_populates="user", cascade="all, delete-orphan")
    settings = relationship(
        "UserSettings", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    subscriptions = relationship(
        "UserSubscription", back_populates="user", cascade="all, delete-orphan"
    )


class UserSession(Base):
    __tablename__ = "user_sessions"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(String(128), unique=True, index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    expires = Column(DateTime, nullable=False)
    logout = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())

    user = relationship("User", back_populates="sessions")


class UserSettings(Base):
    __tablename__ = "user_settings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    theme_id = Column(Integer, default=1, nullable=False)
    list_view = Column(String(20), default="consult", nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())

    user = relationship("User", back_populates="settings")


class UserSubscription(Base):
    __tablename__ = "user_subscriptions"
    __table_args__ = (UniqueConstraint("user_id", "entity_type_id", "entity_id"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    entity_type_id = Column(Integer, nullable=False)
    entity_id = Column(Integer, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="subscriptions")


# ============================================================================
# SELECT-OPTION LOOKUPS
# ============================================================================


class Account(Base):
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)


class Specialty(Base):
    __tablename__ = "specialties"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)


class Territory(Base):
    __tablename__ = "territories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)


class State(Base):
    __tablename__ = "states"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(2), unique=True, nullable=False)
    name = Column(String(64), nullable=False)


class ConsultPurpose(Base):
    __tablename__ = "consult_purposes"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)


class ConsultResult(Base):
    __tablename__ = "consult_results"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)


class LocationContact(Base):
    __tablename__ = "location_contacts"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)


# ============================================================================
# BUSINESS ENTITIES
# ============================================================================


class Consultant(Base):
    __tablename__ = "consultants"

    id = Column(Integer, primary_key=True, index=True)
    slug = Column(String(36), unique=True, nullable=False, index=True, default=generate_slug)
    f_name = Column(String(64), nullable=False)
    l_name = Column(String(64), nullable=False)
    specialty_id = Column(Integer, ForeignKey("specialties.id"), nullable=False)
    territory_id = Column(Integer, ForeignKey("territories.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)
    img_path = Column(String(500), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())

    specialty = relationship("Specialty")
    territory = relationship("Territory")
    consults = relationship("Consult", back_populates="consultant")

    @property
    def full_name(self) -> str:
        return f"{self.f_name} {self.l_name}"


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    slug = Column(String(36), unique=True, nullable=False, index=True, default=generate_slug)
    f_name = Column(String(64), nullable=True)
    l_name = Column(String(64), nullable=True)
    company_name = Column(String(255), nullable=True)
    address_one = Column(String(255), nullable=False)
    address_two = Column(String(64), nullable=True)
    city = Column(String(64), nullable=False)
    state = Column(String(2), nullable=False)
    zip = Column(String(10), nullable=False)
    dob = Column(Date, nullable=True)
    primary_phone = Column(String(20), nullable=True)
    email = Column(String(255), nullable=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    specialty_id = Column(Integer, ForeignKey("specialties.id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())

    specialty = relationship("Specialty")
    consults = relationship("Consult", back_populates="client")

    @property
    def display_name(self) -> str:
        return self.company_name or f"{self.f_name} {self.l_name}"


class Location(Base):
    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, index=True)
    slug = Column(String(36), unique=True, nullable=False, index=True, default=generate_slug)
    name = Column(String(255), nullable=False)
    address_one = Column(String(255), nullable=False)
    address_two = Column(String(64), nullable=True)
    city = Column(String(64), nullable=False)
    state = Column(String(2), nullable=False)
    zip = Column(String(10), nullable=False)
    phone = Column(String(20), nullable=True)
    contact_id = Column(Integer, ForeignKey("location_contacts.id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())

    consults = relationship("Consult", back_populates="location")


class Consult(Base):
    __tablename__ = "consults"

    id = Column(Integer, primary_key=True, index=True)
    slug = Column(String(36), unique=True, nullable=False, index=True, default=generate_slug)
    consultant_id = Column(Integer, ForeignKey("consultants.id"), nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False, index=True)
    consult_purpose_id = Column(Integer, ForeignKey("consult_purposes.id"), nullable=True)
    consult_result_id = Column(Integer, ForeignKey("consult_results.id"), nullable=True)
    consult_start = Column(DateTime, nullable=False, index=True)
    consult_end = Column(DateTime, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())

    consultant = relationship("Consultant", back_populates="consults")
    client = relationship("Client", back_populates="consults")
    location = relationship("Location", back_populates="consults")
    attachments = relationship(
        "ConsultAttachment", back_populates="consult", cascade="all, delete-orphan"
    )


class ConsultAttachment(Base):
    __tablename__ = "consult_attachments"

    id = Column(Integer, primary_key=True, index=True)
    slug = Column(String(36), unique=True, nullable=False, index=True, default=generate_slug)
    consult_id = Column(Integer, ForeignKey("consults.id"), nullable=False, index=True)
    short_desc = Column(String(255), nullable=True)
    mime_type = Column(String(100), nullable=False)
    path = Column(String(500), nullable=False)
    size = Column(Integer, nullable=False)
    uploaded_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    consult = relationship("Consult", back_populates="attachments")
