import ssl

from cartelera.core.config import Settings


def test_url_is_assembled_from_parts():
    s = Settings(
        database_url="",
        db_server="db.example.net",
        db_port=5433,
        db_user="cine",
        db_pass="s3cr@t",
        db_name="cartelera",
    )
    url = s.sqlalchemy_url

    assert url.drivername == "postgresql+asyncpg"
    assert url.host == "db.example.net"
    assert url.port == 5433
    assert url.username == "cine"
    assert url.password == "s3cr@t"
    assert url.database == "cartelera"


def test_database_url_wins_over_parts():
    s = Settings(database_url="sqlite+aiosqlite:///./local.db", db_server="ignored")
    assert s.sqlalchemy_url.drivername == "sqlite+aiosqlite"
    assert s.sqlalchemy_url.host is None


def test_encryption_flags_become_ssl_context():
    trusted = Settings(database_url="", db_encrypt=True, db_trust_server_certificate=True).connect_args()
    assert trusted["ssl"].verify_mode == ssl.CERT_NONE
    assert trusted["ssl"].check_hostname is False

    verified = Settings(database_url="", db_encrypt=True, db_trust_server_certificate=False).connect_args()
    assert verified["ssl"].verify_mode == ssl.CERT_REQUIRED

    assert Settings(database_url="", db_encrypt=False).connect_args() == {}


def test_no_ssl_args_for_other_drivers():
    assert Settings(database_url="sqlite+aiosqlite:///./local.db", db_encrypt=True).connect_args() == {}


def test_defaults():
    s = Settings(database_url="", _env_file=None)
    assert s.port == 3001
    assert s.db_fail_fast is True
    assert s.expose_store_errors is True
    assert s.listings_table == "Cartelera3067"
