from sqlalchemy.pool import StaticPool


async def test_in_memory_sqlite_uses_one_shared_connection(engine):
    # Every session runs on this connection, so they are not isolated
    assert isinstance(engine.sync_engine.pool, StaticPool)
