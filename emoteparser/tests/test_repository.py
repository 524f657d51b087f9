"""Tests for emote lookup and rendering by text command."""

import json

import pytest

from emoteparser.errors import MessageNotFound, RepositoryError
from emoteparser.repository import EmoteRepository, Language, render_emote


@pytest.fixture
def repository(emote_file):
    return EmoteRepository.from_file(emote_file)


def test_every_command_reaches_its_emote(repository):
    assert repository.messages("/surprised") is repository.messages("/ss")
    assert repository.messages("/annoyed").name == "Annoyed"


def test_empty_commands_are_ignored(repository):
    assert not repository.contains_emote("")


def test_targeted_and_untargeted(repository, en_surprised, ja_surprised):
    assert repository.targeted("/ss", Language.EN) == en_surprised
    assert repository.untargeted("/ss", Language.JA) == ja_surprised
    assert repository.untargeted("/annoyed", "en") == "ObjectParameter(2) is annoyed."


def test_unknown_command(repository):
    with pytest.raises(MessageNotFound) as exc_info:
        repository.targeted("/dance", Language.EN)
    assert exc_info.value.name == "/dance"
    assert repository.get_markup("/dance", Language.EN, True) is None
    assert repository.find_emote_id("/dance") is None


def test_all_messages_unique_in_id_order(repository):
    assert [emote.id for emote in repository.all_messages()] == [3, 5]


def test_emote_lists(repository):
    assert set(repository.emote_list()) == {"/surprised", "/ss", "/annoyed"}
    assert list(repository.emote_list_by_id())[0] == "/annoyed"
    assert repository.find_emote_id("/surprised") == 5


def test_invalid_json():
    with pytest.raises(RepositoryError):
        EmoteRepository.from_json("not json")


def test_missing_language():
    data = [{"id": 1, "name": "Wave", "commands": ["/wave"], "en": {"targeted": "a", "untargeted": "b"}}]
    with pytest.raises(RepositoryError):
        EmoteRepository.from_json(json.dumps(data))


def test_missing_file(tmp_path):
    with pytest.raises(RepositoryError):
        EmoteRepository.from_file(tmp_path / "missing.json")


class TestRenderEmote:
    def test_targeted(self, repository, khaldru, puruo):
        text = render_emote(repository, "/ss", Language.EN, khaldru, puruo)
        assert text == "K'haldru Alaba looks at Puruo Jelly in surprise."

    def test_untargeted(self, repository, khaldru):
        me = khaldru.model_copy(update={"is_self": True})
        assert render_emote(repository, "/surprised", Language.EN, me) == "you are surprised."
        assert render_emote(repository, "/surprised", Language.EN, khaldru) == (
            "K'haldru Alaba is surprised."
        )

    def test_japanese(self, repository, ardbert):
        assert render_emote(repository, "/annoyed", Language.JA, ardbert) == "Ardbertはいらいらした。"

    def test_unknown(self, repository, khaldru):
        with pytest.raises(MessageNotFound):
            render_emote(repository, "/dance", Language.EN, khaldru)

    def test_any_lookup(self, khaldru):
        class Single:
            def get_markup(self, key, language, targeted):
                return "ObjectParameter(2) waves." if key == "/wave" else None

        assert render_emote(Single(), "/wave", Language.EN, khaldru) == "K'haldru Alaba waves."
