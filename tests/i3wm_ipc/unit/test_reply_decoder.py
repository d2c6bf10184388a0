"""Unit tests for flat reply decoding."""

import json
import logging

import pytest

from i3wm_ipc.core.decoder import (
    decode_bar_config,
    decode_command_outcomes,
    decode_config,
    decode_json,
    decode_outputs,
    decode_string_list,
    decode_subscribe,
    decode_version,
    decode_workspaces,
)
from i3wm_ipc.core.errors import JsonParseError, UnexpectedContentsError
from i3wm_ipc.models import ColorableBarPart

from fixtures.mock_i3_ipc import rect, sample_bar_config, sample_output, sample_version, sample_workspace


class TestDecodeJson:

    def test_valid(self):
        assert decode_json('[{"success":true}]') == [{"success": True}]

    def test_malformed(self):
        """Test parse failures keep the JSON error as cause."""
        with pytest.raises(JsonParseError) as exc_info:
            decode_json('{"success": tru')
        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)

    def test_empty_payload(self):
        with pytest.raises(JsonParseError):
            decode_json("")


class TestCommandOutcomes:

    def test_outcomes_in_order(self):
        """Test one outcome per command, order preserved."""
        value = decode_json('[{"success":true},{"success":false,"error":"bad syntax"}]')
        outcomes = decode_command_outcomes(value)

        assert [(o.success, o.error) for o in outcomes] == [(True, None), (False, "bad syntax")]

    def test_parse_error_flag(self):
        outcomes = decode_command_outcomes(
            [{"success": False, "parse_error": True, "error": "Expected one of these tokens"}]
        )
        assert outcomes[0].parse_error is True

    def test_empty_command(self):
        assert decode_command_outcomes([]) == []

    def test_missing_success(self):
        with pytest.raises(UnexpectedContentsError):
            decode_command_outcomes([{"error": "what happened"}])

    def test_not_a_list(self):
        with pytest.raises(UnexpectedContentsError):
            decode_command_outcomes({"success": True})


class TestWorkspaces:

    def test_workspace_fields(self):
        payload = (
            '[{"num":1,"name":"1","visible":true,"focused":true,"urgent":false,'
            '"rect":{"x":0,"y":0,"width":1920,"height":1080},"output":"eDP-1"}]'
        )
        (ws,) = decode_workspaces(decode_json(payload))

        assert ws.num == 1
        assert ws.name == "1"
        assert ws.visible is True
        assert ws.focused is True
        assert ws.urgent is False
        assert ws.rect.as_tuple() == (0, 0, 1920, 1080)
        assert ws.output == "eDP-1"
        assert ws.id is None

    def test_named_workspace(self):
        (ws,) = decode_workspaces([sample_workspace(num=-1, name="mail", id=94123)])
        assert ws.num == -1
        assert ws.id == 94123

    def test_missing_output_fails_all(self):
        """Test decoding is all-or-nothing across the list."""
        broken = sample_workspace(num=2, name="2")
        del broken["output"]
        with pytest.raises(UnexpectedContentsError):
            decode_workspaces([sample_workspace(), broken])


class TestOutputs:

    def test_i3_output(self):
        outputs = decode_outputs([
            sample_output(),
            sample_output(name="xroot-0", active=False, primary=False, current_workspace=None),
        ])

        assert outputs[0].current_workspace == "1"
        assert outputs[1].current_workspace is None
        assert outputs[1].active is False
        assert outputs[0].modes == []
        assert outputs[0].make is None

    def test_missing_current_workspace(self):
        data = sample_output()
        del data["current_workspace"]
        assert decode_outputs([data])[0].current_workspace is None

    def test_sway_output(self):
        mode = {"width": 2560, "height": 1440, "refresh": 59951}
        (output,) = decode_outputs([
            sample_output(
                name="DP-1",
                make="Dell Inc.",
                model="DELL U2719D",
                serial="ABC123",
                dpms=True,
                scale=1.25,
                subpixel_hinting="rgb",
                transform="normal",
                modes=[mode],
                current_mode=mode,
                rect=rect(0, 0, 2048, 1152),
            )
        ])

        assert output.model == "DELL U2719D"
        assert output.scale == 1.25
        assert output.current_mode.refresh == 59951
        assert output.modes[0].width == 2560

    def test_integer_scale(self):
        assert decode_outputs([sample_output(scale=2)])[0].scale == 2

    @pytest.mark.parametrize("scale", ["2", False])
    def test_non_number_scale(self, scale):
        with pytest.raises(UnexpectedContentsError):
            decode_outputs([sample_output(scale=scale)])


class TestBarConfig:

    def test_fields(self):
        bar = decode_bar_config(sample_bar_config())

        assert bar.id == "bar-bxuqzf"
        assert bar.mode == "dock"
        assert bar.position == "bottom"
        assert bar.status_command == "i3status"
        assert bar.workspace_buttons is True
        assert bar.verbose is False
        assert bar.colors[ColorableBarPart.BACKGROUND] == "#c0c0c0"
        assert bar.colors[ColorableBarPart.FOCUSED_WORKSPACE_BG] == "#000000"
        assert bar.undocumented_colors == {}

    def test_unknown_color_is_kept(self, caplog):
        """Test undocumented colour keys survive with their value."""
        data = sample_bar_config()
        data["colors"]["totally_new_color"] = "#123456"

        with caplog.at_level(logging.WARNING, logger="i3wm_ipc"):
            bar = decode_bar_config(data)

        assert bar.undocumented_colors == {"totally_new_color": "#123456"}
        assert bar.color("totally_new_color") == "#123456"
        assert bar.color("statusline") == "#00ff00"
        assert len(bar.colors) == 4
        assert "Unknown ColorableBarPart totally_new_color" in caplog.text

    def test_input_not_modified(self):
        data = sample_bar_config()
        data["colors"]["totally_new_color"] = "#123456"
        decode_bar_config(data)
        assert "totally_new_color" in data["colors"]
        assert "undocumented_colors" not in data

    def test_all_documented_parts(self):
        colors = {part.value: "#101010" for part in ColorableBarPart}
        bar = decode_bar_config(sample_bar_config(colors=colors))
        assert len(bar.colors) == len(ColorableBarPart)
        assert bar.colors[ColorableBarPart.URGENT_WORKSPACE_BORDER] == "#101010"
        assert bar.undocumented_colors == {}

    def test_optional_status_command_and_font(self):
        data = sample_bar_config()
        del data["status_command"], data["font"]
        bar = decode_bar_config(data)
        assert bar.status_command is None
        assert bar.font is None

    def test_missing_colors(self):
        data = sample_bar_config()
        del data["colors"]
        with pytest.raises(UnexpectedContentsError):
            decode_bar_config(data)

    def test_non_string_color(self):
        with pytest.raises(UnexpectedContentsError):
            decode_bar_config(sample_bar_config(colors={"background": 0xC0C0C0}))


class TestVersion:

    def test_version(self):
        version = decode_version(sample_version())
        assert (version.major, version.minor, version.patch) == (4, 22, 0)
        assert version.human_readable == "4.22 (2023-01-02)"
        assert version.loaded_config_file_name == "/home/user/.config/i3/config"

    def test_old_i3_without_config_path(self):
        data = sample_version()
        del data["loaded_config_file_name"]
        assert decode_version(data).loaded_config_file_name is None

    def test_missing_patch(self):
        data = sample_version()
        del data["patch"]
        with pytest.raises(UnexpectedContentsError):
            decode_version(data)


class TestSmallReplies:

    def test_marks(self):
        assert decode_string_list(["project:nixos", "scratch"]) == ["project:nixos", "scratch"]

    def test_string_list_rejects_numbers(self):
        with pytest.raises(UnexpectedContentsError):
            decode_string_list(["bar-0", 1])

    def test_string_list_rejects_object(self):
        with pytest.raises(UnexpectedContentsError):
            decode_string_list({"marks": []})

    def test_config(self):
        assert decode_config({"config": "font pango:monospace 8\n"}).config == "font pango:monospace 8\n"

    def test_subscribe(self):
        assert decode_subscribe({"success": True}).success is True
        assert decode_subscribe({"success": False}).success is False

    def test_subscribe_missing_success(self):
        with pytest.raises(UnexpectedContentsError):
            decode_subscribe({})
