"""Tests for JSON/XML payload normalization."""

import json

import pytest

from company_settings.core.errors import ParseError
from company_settings.schemas.setting import SettingType
from company_settings.services.response_parser import (
    PayloadFormat,
    coalesce,
    detect_payload,
    parse_int,
    parse_settings_response,
)

from tests.conftest import SAMPLE_JSON_BODY

XML_TWO_SETTINGS = """<?xml version="1.0" encoding="UTF-8"?>
<settings>
  <setting>
    <settingUuid>u1</settingUuid>
    <type>COMPANY</type>
    <key>k</key>
    <value>djE=</value>
    <encoded>true</encoded>
    <encrypted>false</encrypted>
    <owner>5</owner>
    <revision>2</revision>
    <deleted>false</deleted>
    <created>c</created>
    <modified>m</modified>
  </setting>
  <setting>
    <settingUuid>u2</settingUuid>
    <type>USER</type>
    <key>other</key>
    <value>plain</value>
    <encoded>false</encoded>
    <encrypted>true</encrypted>
    <owner>7</owner>
    <revision>1</revision>
    <deleted>true</deleted>
  </setting>
</settings>"""

XML_ONE_SETTING = """<settings>
  <setting>
    <settingUuid>u1</settingUuid>
    <type>COMPANY</type>
    <key>k</key>
    <value>djE=</value>
    <encoded>true</encoded>
    <encrypted>false</encrypted>
    <owner>5</owner>
    <revision>2</revision>
    <deleted>false</deleted>
    <created>c</created>
    <modified>m</modified>
  </setting>
</settings>"""


class TestJsonResponses:
    """Tests for settingDtoList documents."""

    def test_parses_sample_document(self):
        [setting] = parse_settings_response(SAMPLE_JSON_BODY)

        assert setting.uuid == "u1"
        assert setting.type is SettingType.COMPANY
        assert setting.key == "k"
        assert setting.value == "djE="
        assert setting.encoded is True
        assert setting.encrypted is False
        assert setting.owner == 5
        assert setting.revision == 2
        assert setting.deleted is False
        assert setting.created == "c"
        assert setting.modified == "m"

    def test_empty_list(self):
        assert parse_settings_response('{"settingDtoList": []}') == []

    def test_unrelated_document_yields_no_settings(self):
        assert parse_settings_response('{"something": "else"}') == []

    def test_snake_case_uuid_fallback(self):
        body = json.dumps(
            {
                "settingDtoList": [
                    {
                        "setting_uuid": "u9",
                        "type": "APPLICATION",
                        "key": "k",
                        "owner": 1,
                        "revision": 1,
                    }
                ]
            }
        )

        [setting] = parse_settings_response(body)

        assert setting.uuid == "u9"
        assert setting.value == ""

    def test_deleted_only_when_exactly_true(self):
        records = [
            {"settingUuid": f"u{i}", "type": "COMPANY", "key": "k", "owner": 1,
             "revision": 1, "deleted": flag}
            for i, flag in enumerate(["true", True, "TRUE", "yes", None])
        ]

        settings = parse_settings_response({"settingDtoList": records})

        assert [s.deleted for s in settings] == [True, False, False, False, False]

    def test_leading_integer_of_owner_and_revision(self):
        assert parse_int("12abc") == 12
        assert parse_int(" 7") == 7
        assert parse_int(3) == 3

    def test_numeric_timestamps_pass_through(self):
        body = {
            "settingDtoList": [
                {"settingUuid": "u1", "type": "COMPANY", "key": "k", "owner": 1, "revision": 1,
                 "created": 1700000000000, "modified": 1700000000500}
            ]
        }

        [setting] = parse_settings_response(body)

        assert setting.created == 1700000000000
        assert setting.modified == 1700000000500

    def test_byte_order_mark_is_ignored(self):
        [setting] = parse_settings_response("\ufeff" + SAMPLE_JSON_BODY)

        assert setting.uuid == "u1"

    def test_bytes_are_decoded(self):
        [setting] = parse_settings_response(SAMPLE_JSON_BODY.encode("utf-8"))

        assert setting.key == "k"

    def test_already_structured_document(self):
        payload = detect_payload(json.loads(SAMPLE_JSON_BODY))

        assert payload.format is PayloadFormat.STRUCTURED
        assert len(parse_settings_response(json.loads(SAMPLE_JSON_BODY))) == 1


class TestXmlResponses:
    """Tests for <settings><setting/></settings> documents."""

    def test_parses_multiple_settings(self):
        settings = parse_settings_response(XML_TWO_SETTINGS)

        assert [s.uuid for s in settings] == ["u1", "u2"]
        assert settings[1].type is SettingType.USER
        assert settings[1].encrypted is True
        assert settings[1].deleted is True
        assert settings[1].created is None

    def test_single_setting_equals_json_equivalent(self):
        assert parse_settings_response(XML_ONE_SETTING) == parse_settings_response(
            SAMPLE_JSON_BODY
        )

    def test_value_whitespace_kept_like_json(self):
        value = "\n  line1\n  line2\n"
        xml = (
            "<settings><setting><settingUuid>u1</settingUuid><type>COMPANY</type>"
            f"<key>k</key><value>{value}</value><owner>5</owner><revision>2</revision>"
            "</setting></settings>"
        )
        body = json.dumps(
            {
                "settingDtoList": [
                    {"settingUuid": "u1", "type": "COMPANY", "key": "k", "value": value,
                     "owner": "5", "revision": "2"}
                ]
            }
        )

        [from_xml] = parse_settings_response(xml)
        [from_json] = parse_settings_response(body)

        assert from_xml.value == value
        assert from_xml == from_json

    def test_detects_xml_format(self):
        assert detect_payload(XML_ONE_SETTING).format is PayloadFormat.XML

    def test_empty_settings_element(self):
        assert parse_settings_response("<settings></settings>") == []


class TestInvalidResponses:
    """Tests for payloads that cannot be parsed."""

    def test_unknown_format(self):
        with pytest.raises(ParseError) as exc_info:
            parse_settings_response("not a document")

        assert str(exc_info.value) == "Failed to parse API response: Unknown response format"

    def test_invalid_json(self):
        with pytest.raises(ParseError) as exc_info:
            parse_settings_response('{"settingDtoList": [')

        assert str(exc_info.value).startswith("Failed to parse API response:")

    def test_invalid_xml(self):
        with pytest.raises(ParseError):
            parse_settings_response("<settings><setting>")

    def test_unknown_setting_type(self):
        body = {"settingDtoList": [{"settingUuid": "u", "type": "TENANT", "key": "k",
                                    "owner": 1, "revision": 1}]}

        with pytest.raises(ParseError):
            parse_settings_response(body)

    def test_non_numeric_owner(self):
        body = {"settingDtoList": [{"settingUuid": "u", "type": "COMPANY", "key": "k",
                                    "owner": "abc", "revision": 1}]}

        with pytest.raises(ParseError):
            parse_settings_response(body)


class TestCoalesce:
    """Tests for field alias resolution."""

    def test_first_non_empty_alias_wins(self):
        assert coalesce({"settingUuid": "", "setting_uuid": "b"}, "uuid") == "b"

    def test_field_without_aliases(self):
        assert coalesce({"key": "k"}, "key") == "k"

    def test_missing(self):
        assert coalesce({}, "uuid") is None
