import json

import httpx
import pytest

from conftest import document_row, folder_row
from rmtui import cli
from rmtui.client import DeviceClient
from rmtui.errors import InvalidInput


@pytest.fixture
def device_cli(monkeypatch, device):
    device.folders[None] = [folder_row("f1", "Work"), document_row("d0", "Todo")]
    device.folders["f1"] = [document_row("d1", "Plan"), folder_row("f2", "Old")]
    device.folders["f2"] = []
    device.documents["d0"] = b"todo"
    device.documents["d1"] = b"plan"

    def factory(base_url):
        return DeviceClient(base_url=base_url, transport=httpx.MockTransport(device.handler))

    monkeypatch.setattr(cli, "DeviceClient", factory)
    return device


def test_ls_root(device_cli, capsys):
    assert cli.main(["ls"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["f1\tfolder\tWork", "d0\tdocument\tTodo"]


def test_ls_nested_json(device_cli, capsys):
    assert cli.main(["ls", "Work", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload == [
        {"id": "d1", "name": "Plan", "kind": "document"},
        {"id": "f2", "name": "Old", "kind": "folder"},
    ]


def test_ls_document_is_an_error(device_cli, capsys):
    assert cli.main(["ls", "Todo"]) == 1
    assert "Not a folder" in capsys.readouterr().err


def test_pull_folder_into_directory(device_cli, capsys, tmp_path):
    assert cli.main(["pull", "Work", str(tmp_path)]) == 0
    assert capsys.readouterr().out.strip() == str(tmp_path / "Work")
    assert (tmp_path / "Work" / "Plan.pdf").read_bytes() == b"plan"
    assert (tmp_path / "Work" / "Old").is_dir()


def test_pull_unknown_name(device_cli, capsys, tmp_path):
    assert cli.main(["pull", "Work/Nope", str(tmp_path)]) == 1
    assert "No such entry: Work/Nope" in capsys.readouterr().err


def test_push_missing_file_makes_no_request(device_cli, capsys, tmp_path):
    assert cli.main(["push", str(tmp_path / "ghost.pdf")]) == 1
    assert "File does not exist." in capsys.readouterr().err
    assert device_cli.requests == []


def test_push_uploads(device_cli, capsys, tmp_path):
    source = tmp_path / "slides.pdf"
    source.write_bytes(b"%PDF slides")
    assert cli.main(["push", str(source)]) == 0
    assert device_cli.requests == [("POST", "/upload")]
    assert b'filename="slides.pdf"' in device_cli.uploads[0]


def test_find_entry_root_and_through_document(device_cli):
    client = cli.DeviceClient("http://device.test")
    assert cli.find_entry(client, "") is None
    assert cli.find_entry(client, "/Work/").id == "f1"
    with pytest.raises(InvalidInput):
        cli.find_entry(client, "Todo/anything")
