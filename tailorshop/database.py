"""Database configuration and initialization."""
from sqlalchemy import create_engine
from sqlalchemy.orm import scoped_session, sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

# Create SQLAlchemy base
Base = declarative_base()


def _engine_options(database_uri: str, echo: bool) -> dict:
    """Build create_engine kwargs for the configured backend."""
    options = {'echo': echo}
    if database_uri.startswith('sqlite'):
        options['connect_args'] = {'check_same_thread': False}
        if ':memory:' in database_uri or database_uri == 'sqlite://':
            # A single shared connection, otherwise every checkout sees an empty database
            options['poolclass'] = StaticPool
    else:
        options.update(pool_pre_ping=True, pool_size=5, max_overflow=10)
    return options


def init_db(app):
    """
    Initialize database connection and create the storage table.

    Returns:
        The scoped session registry bound to the new engine.
    """
    database_uri = app.config['SQLALCHEMY_DATABASE_URI']
    engine = create_engine(
        database_uri,
        **_engine_options(database_uri, app.config.get('SQLALCHEMY_ECHO', False))
    )

    registry = scoped_session(
        sessionmaker(autocommit=False, autoflush=False, bind=engine)
    )

    # Register models on the metadata before creating tables
    from tailorshop.models import storage  # noqa: F401
    Base.metadata.create_all(bind=engine)

    # Register teardown
    @app.teardown_appcontext
    def shutdown_session(exception=None):
        """Close database session and rollback on error."""
        if exception:
            registry.rollback()
        registry.remove()

    return registry