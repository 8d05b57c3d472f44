from sqlalchemy import text

from content_api import repo
from content_api.db import begin_write, db_ping


def test_reads_proceed_while_a_write_transaction_is_open(engine, make_item):
    make_item()

    with begin_write(engine) as writer:
        writer.execute(text("UPDATE content_items SET category = 'EDITED'"))

        with engine.connect() as reader:
            assert repo.count_items(reader) == 1
            db_ping(engine)


def test_write_transactions_take_the_lock_up_front(engine):
    seen = []

    with begin_write(engine) as conn:
        seen.append(conn.get_execution_options().get("sqlite_write_lock"))
    with engine.connect() as conn:
        seen.append(conn.get_execution_options().get("sqlite_write_lock"))

    assert seen == [True, None]
