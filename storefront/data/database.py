# storefront/data/database.py
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from storefront.utils.settings import DATABASE_URL, DB_BUSY_TIMEOUT_SECONDS

Base = declarative_base()


def _install_sqlite_hooks(engine: Engine) -> None:
    #pysqlite zaczyna transakcje dopiero przy pierwszym DML, wiec dwa rownolegle
    #zamowienia moglyby sie zakleszczyc przy upgrade SHARED -> RESERVED
    #BEGIN IMMEDIATE bierze blokade zapisu od razu, drugi writer czeka busy timeout
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def make_engine(url: str = DATABASE_URL) -> Engine:
    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            connect_args={
                "check_same_thread": False,
                "timeout": DB_BUSY_TIMEOUT_SECONDS,
            },
        )
        _install_sqlite_hooks(engine)
        return engine

    return create_engine(url, pool_pre_ping=True)


def make_session_factory(bind: Engine) -> sessionmaker:
    # obiekty zwracane z use case'ow musza byc czytelne po zamknieciu sesji
    return sessionmaker(bind=bind, autoflush=False, expire_on_commit=False)


engine = make_engine()
SessionLocal = make_session_factory(engine)


def init_db(bind: Engine = engine) -> None:
    # rejestracja wszystkich modeli w Base.metadata przed create_all
    import storefront.data.models  # noqa: F401

    Base.metadata.create_all(bind=bind)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
