"""Tests for the symmetric related-transactions relation."""

import pytest

from ledgerbook.cli.main import cli
from ledgerbook.domain.errors import NotFoundError, ValidationError
from ledgerbook.domain.transaction_links import TransactionLinkService


@pytest.fixture
def link_service(temp_db):
    return TransactionLinkService(temp_db)


@pytest.fixture
def pair(make_transaction):
    return make_transaction("-30.00"), make_transaction("30.00", third_party="Refund")


def test_link_is_symmetric(link_service, pair):
    a, b = pair

    link_service.link_transactions(a.id, b.id)

    assert link_service.get_related_transactions(a.id) == [b]
    assert link_service.get_related_transactions(b.id) == [a]
    assert [link.related_transaction_id for link in link_service.list_links(a.id)] == [b.id]
    assert [link.related_transaction_id for link in link_service.list_links(b.id)] == [a.id]


def test_link_is_idempotent(link_service, pair):
    a, b = pair

    link_service.link_transactions(a.id, b.id)
    link_service.link_transactions(a.id, b.id)
    link_service.link_transactions(b.id, a.id)

    assert len(link_service.list_links(a.id)) == 1
    assert len(link_service.list_links(b.id)) == 1


def test_link_repairs_missing_reverse_row(link_service, temp_db, pair):
    a, b = pair
    temp_db.create_link(a.id, b.id)
    assert link_service.are_linked(b.id, a.id)
    assert link_service.list_links(b.id) == []

    link_service.link_transactions(a.id, b.id)

    assert len(link_service.list_links(a.id)) == 1
    assert len(link_service.list_links(b.id)) == 1


def test_self_link_is_rejected(link_service, pair):
    a, _ = pair

    with pytest.raises(ValidationError, match="cannot be linked to itself"):
        link_service.link_transactions(a.id, a.id)


def test_link_to_missing_transaction(link_service, pair):
    a, _ = pair

    with pytest.raises(NotFoundError, match="Transaction 500 not found"):
        link_service.link_transactions(a.id, 500)
    assert link_service.list_links(a.id) == []


def test_unlink_removes_both_directions(link_service, pair):
    a, b = pair
    link_service.link_transactions(a.id, b.id)

    link_service.unlink_transactions(b.id, a.id)

    assert not link_service.are_linked(a.id, b.id)
    assert link_service.get_related_transactions(a.id) == []
    assert link_service.get_related_transactions(b.id) == []


def test_unlink_when_not_linked_is_a_noop(link_service, pair):
    a, b = pair

    link_service.unlink_transactions(a.id, b.id)

    assert link_service.list_links(a.id) == []


def test_related_is_not_transitive(link_service, pair, make_transaction):
    a, b = pair
    c = make_transaction("1.00", third_party="Other")
    link_service.link_transactions(a.id, b.id)
    link_service.link_transactions(b.id, c.id)

    assert link_service.get_related_transactions(a.id) == [b]
    assert {t.id for t in link_service.get_related_transactions(b.id)} == {a.id, c.id}


def test_database_cascades_link_rows(temp_db, link_service, pair):
    a, b = pair
    link_service.link_transactions(a.id, b.id)

    temp_db.delete_transaction(a.id)

    assert link_service.list_links(b.id) == []


def test_cli_link_related_unlink(cli_runner, temp_db, pair):
    a, b = pair
    base = ["--db-path", temp_db.database_path, "transaction"]

    linked = cli_runner.invoke(cli, [*base, "link", str(a.id), str(b.id)])
    assert linked.exit_code == 0
    assert f"Linked transactions {a.id} and {b.id}" in linked.output

    related = cli_runner.invoke(cli, [*base, "related", str(b.id)])
    assert related.exit_code == 0
    assert "Found 1 transaction(s)" in related.output
    assert "-30.00" in related.output

    unlinked = cli_runner.invoke(cli, [*base, "unlink", str(a.id), str(b.id)])
    assert unlinked.exit_code == 0

    related = cli_runner.invoke(cli, [*base, "related", str(b.id)])
    assert "No related transactions" in related.output


def test_cli_self_link(cli_runner, temp_db, pair):
    a, _ = pair

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "transaction", "link", str(a.id), str(a.id)]
    )

    assert result.exit_code == 1
    assert "cannot be linked to itself" in result.output
