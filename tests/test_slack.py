from unittest.mock import Mock, patch

import pytest

from menubot.slack import SlackAPI, SlackAPIError


def _response(payload=None):
    response = Mock()
    response.json.return_value = payload or {}
    return response


@pytest.fixture
def slack():
    return SlackAPI("xoxb-test", "C0123")


@patch("menubot.slack.requests.post")
def test_upload_file(mock_post, slack, tmp_path):
    path = tmp_path / "2024-10-21-menu.pdf"
    path.write_bytes(b"%PDF-menu")
    mock_post.side_effect = [
        _response({"ok": True, "upload_url": "https://files.slack.com/upload/abc", "file_id": "F1"}),
        _response(),
        _response({"ok": True, "files": [{"id": "F1", "permalink": "https://team.slack.com/files/F1"}]}),
    ]

    assert slack.upload_file(str(path)) == "https://team.slack.com/files/F1"

    get_url, upload, complete = mock_post.call_args_list
    assert get_url.args[0] == "https://slack.com/api/files.getUploadURLExternal"
    assert get_url.kwargs["data"] == {"filename": "2024-10-21-menu.pdf", "length": 9}
    assert get_url.kwargs["headers"] == {"Authorization": "Bearer xoxb-test"}
    assert upload.args[0] == "https://files.slack.com/upload/abc"
    assert complete.args[0] == "https://slack.com/api/files.completeUploadExternal"
    assert complete.kwargs["json"] == {"files": [{"id": "F1", "title": "2024-10-21-menu.pdf"}]}


@patch("menubot.slack.requests.post")
def test_upload_without_permalink_fails(mock_post, slack, tmp_path):
    path = tmp_path / "menu.pdf"
    path.write_bytes(b"%PDF")
    mock_post.side_effect = [
        _response({"ok": True, "upload_url": "https://files.slack.com/upload/abc", "file_id": "F1"}),
        _response(),
        _response({"ok": True, "files": []}),
    ]

    with pytest.raises(SlackAPIError, match="no permalink"):
        slack.upload_file(str(path))


@patch("menubot.slack.requests.post")
def test_post_message(mock_post, slack):
    mock_post.return_value = _response({"ok": True, "ts": "1.2"})

    assert slack.post_message("hello")["ts"] == "1.2"
    mock_post.assert_called_once_with(
        "https://slack.com/api/chat.postMessage",
        headers={"Authorization": "Bearer xoxb-test"},
        data=None,
        json={"channel": "C0123", "text": "hello"},
        timeout=30,
    )


@patch("menubot.slack.requests.post")
def test_api_error(mock_post, slack):
    mock_post.return_value = _response({"ok": False, "error": "channel_not_found"})

    with pytest.raises(SlackAPIError, match="chat.postMessage failed: channel_not_found"):
        slack.post_message("hello")
