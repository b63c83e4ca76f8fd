import os
import time

from cosmos2xlsx.constants import SENSITIVE_KEYS
from cosmos2xlsx.logging.utils import (
    cleanup_old_logs,
    mask_connection_string,
    sanitize_data,
    sanitize_string,
)


def test_sanitize_dict_masks_sensitive_keys():
    data = {"AccountKey": "abcdefghijklmnop", "password": "short", "name": "ok"}

    result = sanitize_data(data, SENSITIVE_KEYS)

    assert result["AccountKey"] == "abcd...mnop"
    assert result["password"] == "***"
    assert result["name"] == "ok"


def test_sanitize_nested_list():
    data = [{"secret": "x"}, "AccountKey=abc;"]

    result = sanitize_data(data, SENSITIVE_KEYS)

    assert result[0]["secret"] == "***"
    assert result[1] == "AccountKey=***;"


def test_sanitize_non_container_passthrough():
    assert sanitize_data(42, SENSITIVE_KEYS) == 42


def test_sanitize_string_masks_signed_url():
    text = "GET https://acct/docs?sig=abcdef&se=2026"

    assert sanitize_string(text) == "GET https://acct/docs?sig=***&se=2026"


def test_mask_connection_string():
    masked = mask_connection_string(
        "AccountEndpoint=https://acct.documents.azure.com:443/;AccountKey=Zm9vYmFy==;"
    )

    assert masked == "AccountEndpoint=https://acct.documents.azure.com:443/;AccountKey=***;"
    assert mask_connection_string("") == ""


def test_cleanup_old_logs(tmp_path):
    old = tmp_path / "cosmos2xlsx.log.2020-01-01"
    new = tmp_path / "cosmos2xlsx.log.2099-01-01"
    old.write_text("x")
    new.write_text("y")
    stale = time.time() - 30 * 86400
    os.utime(old, (stale, stale))

    removed = cleanup_old_logs(tmp_path, retention_days=7)

    assert removed == 1
    assert not old.exists()
    assert new.exists()


def test_cleanup_missing_directory(tmp_path):
    assert cleanup_old_logs(tmp_path / "nope") == 0
