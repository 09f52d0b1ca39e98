# learnify/db/init_db.py
import logging

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from learnify import models  # noqa
from learnify.db.base import Base
from learnify.models.role import Role, RoleName

logger = logging.getLogger(__name__)


def seed_roles(db: Session) -> None:
    existing = {name for (name,) in db.query(Role.name).all()}
    missing = [role for role in RoleName if role.value not in existing]
    for role in missing:
        db.add(Role(name=role.value))
    if missing:
        db.commit()
        logger.info("Seeded roles: %s", ", ".join(role.value for role in missing))


def init_db(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)
    with Session(bind=engine) as db:
        seed_roles(db)
