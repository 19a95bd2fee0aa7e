import importlib

import structlog
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from catalog.config import settings

logger = structlog.get_logger()

DATABASE_URL = settings.DATABASE_URL
_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, future=True, echo=False, connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

# signed 64-bit INTEGER, the widest id any supported backend stores
MAX_ID = 2**63 - 1


def storable_id(value: int) -> bool:
    return -MAX_ID - 1 <= value <= MAX_ID

# every module that declares tables; imported before create_all so metadata is complete
MODEL_MODULES = [
    "catalog.models.category",
    "catalog.models.product",
    "catalog.models.user",
    "catalog.models.order",
]


def import_models():
    for mod in MODEL_MODULES:
        importlib.import_module(mod)


def init_db(reset: bool = False, bind=None):
    """
    Create the schema on `bind` (the module engine by default).

    With reset=True (or RESET_DB set in the environment) every table is
    dropped first, which is what tests and local demos want.
    """
    bind = bind or engine
    import_models()

    if reset or settings.RESET_DB:
        logger.warning("Dropping all catalog tables", url=str(bind.url))
        Base.metadata.drop_all(bind=bind)

    Base.metadata.create_all(bind=bind)
    logger.info("Database initialized", tables=sorted(Base.metadata.tables))


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
