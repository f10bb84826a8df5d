import pytest

from sharex_server.app.services import filename_service
from sharex_server.app.services.filename_service import ALPHABET, allocate_name, extension_of, generate
from sharex_server.utils.logging_setup import quiet_log


@pytest.mark.parametrize("length", [1, 10, 32])
def test_generate_length_and_alphabet(length):
    name = generate(length)
    assert len(name) == length
    assert set(name) <= set(ALPHABET)


def test_generate_rejects_zero_length():
    with pytest.raises(ValueError):
        generate(0)


def test_alphabet_is_url_safe():
    assert len(ALPHABET) == 64
    assert set(ALPHABET) <= set("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789_-")


@pytest.mark.parametrize(
    "original, ext",
    [
        ("photo.png", ".png"),
        ("archive.tar.gz", ".gz"),
        ("README", ""),
        ("", ""),
        (".bashrc", ".bashrc"),
        ("trailing.", "."),
        ("some.dir/file", ""),
        ("C:\\shots\\screen.jpg", ".jpg"),
        ("../../etc/passwd.txt", ".txt"),
    ],
)
def test_extension_of(original, ext):
    assert extension_of(original) == ext


class _FakeStorage:
    def __init__(self, taken):
        self.taken = set(taken)
        self.checked = []
        self.log = quiet_log()

    async def exists(self, name):
        self.checked.append(name)
        return name in self.taken


@pytest.mark.anyio
async def test_allocate_name_keeps_free_candidate(monkeypatch):
    monkeypatch.setattr(filename_service, "generate", lambda length: "a" * length)
    storage = _FakeStorage(taken=[])
    assert await allocate_name(storage, "shot.png", 5) == "aaaaa.png"
    assert storage.checked == ["aaaaa.png"]


@pytest.mark.anyio
async def test_allocate_name_draws_exactly_one_more(monkeypatch):
    candidates = iter(["first", "second", "third"])
    monkeypatch.setattr(filename_service, "generate", lambda length: next(candidates))
    # the second candidate is accepted without another check, even if taken
    storage = _FakeStorage(taken=["first.txt", "second.txt"])
    assert await allocate_name(storage, "notes.txt", 5) == "second.txt"
    assert storage.checked == ["first.txt"]
