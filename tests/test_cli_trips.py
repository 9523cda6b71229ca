"""Tests for the trips and batches commands."""

from datetime import date

from tripledger.cli.main import cli

from conftest import USER_ID

BASE = "12 Main Street, Navan, Co. Meath"


def _invoke(cli_runner, temp_db, *args, input=None):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], input=input)


def test_trips_lists_detected_trip(cli_runner, temp_db, store_transactions, galway_trip_rows):
    store_transactions(galway_trip_rows)

    result = _invoke(cli_runner, temp_db, "trips", "--base-address", BASE)

    assert result.exit_code == 0
    assert "Base location: Navan" in result.output
    assert "Found 1 trip(s)" in result.output
    assert "1. Galway: 2025-03-10 to 2025-03-11" in result.output
    assert "Subsistence: €186.17 (vouched, 1 night(s), 1 day(s))" in result.output


def test_trips_reads_settings_from_environment(
    cli_runner, temp_db, store_transactions, galway_trip_rows, monkeypatch
):
    store_transactions(galway_trip_rows)
    monkeypatch.setenv("TRIPLEDGER_BASE_ADDRESS", BASE)
    monkeypatch.setenv("TRIPLEDGER_COMMUTE_METHOD", "personal_vehicle")
    monkeypatch.setenv("TRIPLEDGER_OWNS_VEHICLE", "1")

    result = _invoke(cli_runner, temp_db, "trips")

    assert result.exit_code == 0
    assert "Mileage: €165.82 (320 km)" in result.output


def test_trips_none_found(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "trips", "--base-address", BASE)

    assert result.exit_code == 0
    assert "No trips found." in result.output


def test_trips_without_base_warns(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "trips")

    assert "no base location found" in result.output


def test_trips_date_window(cli_runner, temp_db, store_transactions, galway_trip_rows):
    store_transactions(galway_trip_rows)

    result = _invoke(
        cli_runner,
        temp_db,
        "trips",
        "--base-address",
        BASE,
        "--start-date",
        "2025-04-01",
        "--end-date",
        "2025-04-30",
    )

    assert "No trips found." in result.output


def test_trips_inverted_window(cli_runner, temp_db):
    result = _invoke(
        cli_runner, temp_db, "trips", "--start-date", "2025-04-30", "--end-date", "2025-04-01"
    )

    assert result.exit_code == 1
    assert "Start date must be before" in result.output


def test_trips_rejects_two_periods(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "trips", "--this-month", "--tax-window")

    assert result.exit_code == 1
    assert "Only one period option" in result.output


def test_trips_confirm(cli_runner, temp_db, store_transactions, galway_trip_rows, travel_categories):
    stored = store_transactions(galway_trip_rows)
    ids = [t.id for t in stored]
    # Release the fixture's session so the command sees a clean store
    temp_db.disconnect()

    result = _invoke(cli_runner, temp_db, "trips", "--base-address", BASE, "--confirm", input="y\n")

    assert result.exit_code == 0
    assert "Updated 3 of 3 transaction(s)" in result.output
    notes = [temp_db.get_transaction(txn_id).notes for txn_id in ids]
    assert all(note.startswith("[Trip] Business trip to Galway") for note in notes)


def test_trips_confirm_declined(cli_runner, temp_db, store_transactions, galway_trip_rows):
    store_transactions(galway_trip_rows)

    result = _invoke(cli_runner, temp_db, "trips", "--base-address", BASE, "--confirm", input="n\n")

    assert result.exit_code == 0
    assert "No trips confirmed." in result.output


def test_batches_list_and_delete(cli_runner, temp_db, fixtures_dir):
    _invoke(cli_runner, temp_db, "import", str(fixtures_dir / "aib_statement.csv"))

    listed = _invoke(cli_runner, temp_db, "batches", "list")
    assert listed.exit_code == 0
    assert "aib_statement.csv" in listed.output

    (batch,) = temp_db.list_import_batches(USER_ID)
    deleted = _invoke(cli_runner, temp_db, "batches", "delete", str(batch.id), "--yes")

    assert deleted.exit_code == 0
    assert "Deleted import 'aib_statement.csv' and 4 transaction(s)" in deleted.output
    assert temp_db.list_transactions(USER_ID) == []


def test_batches_delete_asks_first(cli_runner, temp_db, fixtures_dir):
    _invoke(cli_runner, temp_db, "import", str(fixtures_dir / "aib_statement.csv"))
    (batch,) = temp_db.list_import_batches(USER_ID)

    result = _invoke(cli_runner, temp_db, "batches", "delete", str(batch.id), input="n\n")

    assert "Deletion cancelled." in result.output
    assert len(temp_db.list_transactions(USER_ID)) == 4


def test_batches_delete_other_users_batch(cli_runner, temp_db, fixtures_dir):
    _invoke(cli_runner, temp_db, "import", str(fixtures_dir / "aib_statement.csv"))
    (batch,) = temp_db.list_import_batches(USER_ID)

    result = _invoke(cli_runner, temp_db, "--user", "2", "batches", "delete", str(batch.id), "--yes")

    assert result.exit_code == 1
    assert f"Import batch {batch.id} not found" in result.output


def test_batches_list_empty(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "batches", "list")

    assert "No imports found." in result.output


def test_batches_show(cli_runner, temp_db, fixtures_dir):
    _invoke(cli_runner, temp_db, "import", str(fixtures_dir / "aib_statement.csv"))
    (batch,) = temp_db.list_import_batches(USER_ID)

    result = _invoke(cli_runner, temp_db, "batches", "show", str(batch.id))

    assert result.exit_code == 0
    assert "HOTEL MERIDIAN GALWAY" in result.output
    assert "-€140.00" in result.output
    assert "+€650.00" in result.output


def test_batches_show_missing(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "batches", "show", "99")

    assert result.exit_code == 1
    assert "Error: Import batch 99 not found" in result.output
