"""Tests for pwcycle.core.fixtures."""

import pytest

from pwcycle.core.config import CycleConfig
from pwcycle.core.fixtures import FixtureError, load_fixtures, load_secret, load_usernames


@pytest.mark.unit
def test_usernames_in_file_order_with_duplicates(tmp_path):
    path = tmp_path / "users.csv"
    path.write_text("Id,Username\n1,b@x.com\n2,a@x.com\n3,b@x.com\n")

    assert load_usernames(path) == ["b@x.com", "a@x.com", "b@x.com"]


@pytest.mark.unit
def test_usernames_skip_blank_lines(tmp_path):
    path = tmp_path / "users.csv"
    path.write_text("Username\n\na@x.com\n\nb@x.com\n")

    assert load_usernames(path) == ["a@x.com", "b@x.com"]


@pytest.mark.unit
def test_usernames_other_delimiter(tmp_path):
    path = tmp_path / "users.tsv"
    path.write_text("Username\tRole\na@x.com\tadmin\n")

    assert load_usernames(path, delimiter="\t") == ["a@x.com"]


@pytest.mark.unit
def test_usernames_header_only_is_an_error(tmp_path):
    path = tmp_path / "users.csv"
    path.write_text("Username,Role\n")

    with pytest.raises(FixtureError, match="no username records"):
        load_usernames(path)


@pytest.mark.unit
def test_usernames_missing_column(tmp_path):
    path = tmp_path / "users.csv"
    path.write_text("Email\na@x.com\n")

    with pytest.raises(FixtureError, match="no 'Username' column"):
        load_usernames(path)


@pytest.mark.unit
def test_usernames_missing_file(tmp_path):
    with pytest.raises(FixtureError, match="not found"):
        load_usernames(tmp_path / "absent.csv")


@pytest.mark.unit
def test_usernames_read_is_idempotent(tmp_path):
    path = tmp_path / "users.csv"
    path.write_text("Username\nc@x.com\na@x.com\nb@x.com\n")

    assert load_usernames(path) == load_usernames(path) == ["c@x.com", "a@x.com", "b@x.com"]


@pytest.mark.unit
def test_secret_is_trimmed(tmp_path):
    path = tmp_path / "password.txt"
    path.write_text("  s3cret!  \n")

    assert load_secret(path) == "s3cret!"


@pytest.mark.unit
def test_secret_missing_file(tmp_path):
    with pytest.raises(FixtureError, match="Secret file not found"):
        load_secret(tmp_path / "newPassword.txt")


@pytest.mark.unit
def test_secret_blank_file(tmp_path):
    path = tmp_path / "password.txt"
    path.write_text("   \n")

    with pytest.raises(FixtureError, match="empty"):
        load_secret(path)


@pytest.mark.unit
def test_load_fixtures_from_data_dir(data_dir):
    fixtures = load_fixtures(CycleConfig(data_dir=str(data_dir)))

    assert fixtures.usernames == ["a@x.com", "b@x.com"]
    assert fixtures.password == "P0"
    assert fixtures.new_password == "P1"
    assert [c.username for c in fixtures.credentials] == ["a@x.com", "b@x.com"]
    assert fixtures.secrets.current_password == "P0"
    assert fixtures.secrets.new_password == "P1"


@pytest.mark.unit
def test_load_fixtures_missing_new_password(data_dir):
    (data_dir / "newPassword.txt").unlink()

    with pytest.raises(FixtureError):
        load_fixtures(CycleConfig(data_dir=str(data_dir)))


@pytest.mark.unit
def test_usernames_skip_rows_with_blank_username(tmp_path):
    path = tmp_path / "users.csv"
    path.write_text("Username,Role\n,admin\na@x.com,user\n  ,user\n")

    assert load_usernames(path) == ["a@x.com"]


@pytest.mark.unit
def test_usernames_all_blank_is_an_error(tmp_path):
    path = tmp_path / "users.csv"
    path.write_text("Username,Role\n,admin\n ,user\n")

    with pytest.raises(FixtureError, match="no username records"):
        load_usernames(path)


@pytest.mark.unit
def test_usernames_with_byte_order_mark(tmp_path):
    path = tmp_path / "users.csv"
    path.write_bytes("\ufeffUsername,Role\na@x.com,user\n".encode("utf-8"))

    assert load_usernames(path) == ["a@x.com"]
