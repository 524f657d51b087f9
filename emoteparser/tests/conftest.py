import json

import pytest

from emoteparser.answers import Answers, Character, Gender

EN_SURPRISED = (
    "<Clickable(<If(Equal(ObjectParameter(1),ObjectParameter(2)))>you<Else/>"
    "<If(PlayerParameter(7))><SheetEn(ObjStr,2,PlayerParameter(7),1,1)/><Else/>ObjectParameter(2)</If>"
    "</If>)/> <If(Equal(ObjectParameter(1),ObjectParameter(2)))>look<Else/>looks</If> at "
    "<If(Equal(ObjectParameter(1),ObjectParameter(3)))><If(PlayerParameter(8))>"
    "<SheetEn(ObjStr,2,PlayerParameter(8),1,1)/><Else/>you</If><Else/><If(PlayerParameter(8))>"
    "<SheetEn(ObjStr,2,PlayerParameter(8),1,1)/><Else/>ObjectParameter(3)</If></If> in surprise."
)

EN_ANNOYED = (
    "<Clickable(<If(Equal(ObjectParameter(1),ObjectParameter(2)))>you<Else/>"
    "<If(PlayerParameter(7))><SheetEn(ObjStr,2,PlayerParameter(7),1,1)/><Else/>ObjectParameter(2)</If>"
    "</If>)/> <If(Equal(ObjectParameter(1),ObjectParameter(2)))>express<Else/>expresses</If> "
    "<If(Equal(ObjectParameter(1),ObjectParameter(2)))>your<Else/><If(PlayerParameter(7))>"
    "<If(<Sheet(BNpcName,PlayerParameter(7),6)/>)>her<Else/>his</If><Else/>"
    "<If(PlayerParameter(5))>her<Else/>his</If></If></If> annoyance with "
    "<If(Equal(ObjectParameter(1),ObjectParameter(3)))><If(PlayerParameter(8))>"
    "<SheetEn(ObjStr,2,PlayerParameter(8),1,1)/><Else/>you</If><Else/><If(PlayerParameter(8))>"
    "<SheetEn(ObjStr,2,PlayerParameter(8),1,1)/><Else/>ObjectParameter(3)</If></If>."
)

JA_SURPRISED = (
    "<If(PlayerParameter(7))><Sheet(ObjStr,PlayerParameter(7),0)/><Else/>ObjectParameter(2)</If>"
    "はおどろいた。"
)


class FixedAnswers(Answers):
    """Answers every condition from a dict, defaulting to False."""

    def __init__(self, truths=None, names=None):
        self.truths = truths or {}
        self.names = names or {}

    def as_bool(self, condition):
        return self.truths.get(condition, False)

    def as_string(self, text):
        return self.names.get(text, f"[{text.value}]")


@pytest.fixture
def khaldru():
    return Character(name="K'haldru Alaba", gender=Gender.FEMALE, is_player=True, is_self=False)


@pytest.fixture
def puruo():
    return Character(name="Puruo Jelly", gender=Gender.MALE, is_player=True, is_self=False)


@pytest.fixture
def ardbert():
    return Character(name="Ardbert", gender=Gender.MALE, is_player=False, is_self=False)


@pytest.fixture
def fixed_answers():
    return FixedAnswers


@pytest.fixture
def en_surprised():
    return EN_SURPRISED


@pytest.fixture
def en_annoyed():
    return EN_ANNOYED


@pytest.fixture
def ja_surprised():
    return JA_SURPRISED


EMOTES = [
    {
        "id": 5,
        "name": "Surprised",
        "commands": ["/surprised", "/ss"],
        "en": {
            "targeted": EN_SURPRISED,
            "untargeted": "<If(Equal(ObjectParameter(1),ObjectParameter(2)))>you<Else/>"
            "<If(PlayerParameter(7))><SheetEn(ObjStr,2,PlayerParameter(7),1,1)/><Else/>"
            "ObjectParameter(2)</If></If> <If(Equal(ObjectParameter(1),ObjectParameter(2)))>"
            "are<Else/>is</If> surprised.",
        },
        "ja": {"targeted": JA_SURPRISED, "untargeted": JA_SURPRISED},
    },
    {
        "id": 3,
        "name": "Annoyed",
        "commands": ["/annoyed", ""],
        "en": {"targeted": EN_ANNOYED, "untargeted": "ObjectParameter(2) is annoyed."},
        "ja": {"targeted": JA_SURPRISED, "untargeted": "ObjectParameter(2)はいらいらした。"},
    },
]


@pytest.fixture
def emotes():
    return json.loads(json.dumps(EMOTES))


@pytest.fixture
def emote_file(tmp_path, emotes):
    path = tmp_path / "emotes.json"
    path.write_text(json.dumps(emotes, ensure_ascii=False), encoding="utf-8")
    return path
