"""Idempotent seeding of the select-option lookup tables"""

import logging

from sqlalchemy.orm import Session

from .models import (
    Account,
    ConsultPurpose,
    ConsultResult,
    LocationContact,
    Specialty,
    State,
    Territory,
)

logger = logging.getLogger(__name__)

TERRITORIES = ["National", "Northeast", "West", "Southeast", "Midwest"]
SPECIALTIES = ["Finance", "Insurance", "Technology", "Government"]
LOCATION_CONTACTS = ["Location Admin", "Site Manager"]
ACCOUNTS = ["House Account", "Enterprise", "Small Business"]
CONSULT_PURPOSES = ["Introduction", "Sales", "Support", "Follow-up"]
CONSULT_RESULTS = ["Closed", "Follow-up Needed", "No Sale", "Rescheduled"]

STATES = [
    ("AL", "Alabama"), ("AK", "Alaska"), ("AZ", "Arizona"), ("AR", "Arkansas"),
    ("CA", "California"), ("CO", "Colorado"), ("CT", "Connecticut"), ("DE", "Delaware"),
    ("DC", "District of Columbia"), ("FL", "Florida"), ("GA", "Georgia"), ("HI", "Hawaii"),
    ("ID", "Idaho"), ("IL", "Illinois"), ("IN", "Indiana"), ("IA", "Iowa"),
    ("KS", "Kansas"), ("KY", "Kentucky"), ("LA", "Louisiana"), ("ME", "Maine"),
    ("MD", "Maryland"), ("MA", "Massachusetts"), ("MI", "Michigan"), ("MN", "Minnesota"),
    ("MS", "Mississippi"), ("MO", "Missouri"), ("MT", "Montana"), ("NE", "Nebraska"),
    ("NV", "Nevada"), ("NH", "New Hampshire"), ("NJ", "New Jersey"), ("NM", "New Mexico"),
    ("NY", "New York"), ("NC", "North Carolina"), ("ND", "North Dakota"), ("OH", "Ohio"),
    ("OK", "Oklahoma"), ("OR", "Oregon"), ("PA", "Pennsylvania"), ("RI", "Rhode Island"),
    ("SC", "South Carolina"), ("SD", "South Dakota"), ("TN", "Tennessee"), ("TX", "Texas"),
    ("UT", "Utah"), ("VT", "Vermont"), ("VA", "Virginia"), ("WA", "Washington"),
    ("WV", "West Virginia"), ("WI", "Wisconsin"), ("WY", "Wyoming"),
]


def _seed_names(db: Session, model, names: list[str]) -> int:
    existing = {row.name for row in db.query(model.name).all()}
    missing = [name for name in names if name not in existing]
    for name in missing:
        db.add(model(name=name))
    return len(missing)


def seed_lookups(db: Session) -> int:
    """Insert any missing lookup rows. Returns the number of rows added."""
    added = 0
    added += _seed_names(db, Territory, TERRITORIES)
    added += _seed_names(db, Specialty, SPECIALTIES)
    added += _seed_names(db, LocationContact, LOCATION_CONTACTS)
    added += _seed_names(db, Account, ACCOUNTS)
    added += _seed_names(db, ConsultPurpose, CONSULT_PURPOSES)
    added += _seed_names(db, ConsultResult, CONSULT_RESULTS)

    existing_states = {row.code for row in db.query(State.code).all()}
    for code, name in STATES:
        if code not in existing_states:
            db.add(State(code=code, name=name))
            added += 1

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

    if added:
        logger.info(f"✅ Seeded {added} lookup rows")
    return added
