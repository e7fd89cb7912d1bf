import textwrap
import warnings

import pytest

from bionic_reader.config import DEFAULT_PIPELINE, PipelineSpec, _env_overrides, load_spec


def test_missing_file_yields_default_pipeline(tmp_path):
    spec = load_spec(tmp_path / "absent.yaml")
    assert spec.pipeline == list(DEFAULT_PIPELINE)
    assert spec.options == {}


def test_default_spec_model():
    assert PipelineSpec().pipeline == ["html_parse", "emphasize", "html_render"]


def test_yaml_options_are_loaded(tmp_path):
    cfg = tmp_path / "pipeline.yaml"
    cfg.write_text(
        textwrap.dedent(
            """
            pipeline: [html_parse, emphasize, html_render]
            options:
              emphasize:
                root_id: qa
                exclude_classes: [cloze, answer]
            """
        )
    )
    spec = load_spec(cfg)
    assert spec.options["emphasize"] == {"root_id": "qa", "exclude_classes": ["cloze", "answer"]}


def test_unknown_option_step_emits_warning(tmp_path):
    cfg = tmp_path / "pipeline.yaml"
    cfg.write_text(
        textwrap.dedent(
            """
            pipeline: [html_parse, emphasize]
            options:
              emphasize:
                emphasis_tag: strong
              extra_pass:
                foo: 1
            """
        )
    )
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        load_spec(cfg)

    assert [w.message.args[0] for w in caught] == ["Unknown pipeline options: extra_pass"]


def test_known_options_do_not_warn(tmp_path):
    cfg = tmp_path / "pipeline.yaml"
    cfg.write_text("options:\n  emphasize:\n    root_id: qa\n")
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        load_spec(cfg)
    assert not caught


def test_env_and_cli_overrides_merge_in_order(tmp_path, monkeypatch):
    cfg = tmp_path / "pipeline.yaml"
    cfg.write_text(
        textwrap.dedent(
            """
            options:
              emphasize:
                root_id: qa
                emphasis_tag: b
              html_render:
                formatter: minimal
            """
        )
    )
    monkeypatch.setenv("BIONIC_EMPHASIZE__EMPHASIS_TAG", "strong")
    monkeypatch.setenv("BIONIC_HTML_RENDER__FORMATTER", "html")
    overrides = {"emphasize": {"root_id": "card"}}

    spec = load_spec(cfg, overrides=overrides)

    assert spec.options["emphasize"] == {"root_id": "card", "emphasis_tag": "strong"}
    assert spec.options["html_render"] == {"formatter": "html"}


def test_env_overrides_are_yaml_coerced_and_prefixed():
    env = {
        "BIONIC_EMPHASIZE__EXCLUDE_TAGS": "[script, pre]",
        "BIONIC_HTML_PARSE__STRICT": "true",
        "OTHER__KEY": "ignored",
        "BIONIC_NOSEPARATOR": "ignored",
    }
    assert _env_overrides(env) == {
        "emphasize": {"exclude_tags": ["script", "pre"]},
        "html_parse": {"strict": True},
    }


def test_non_mapping_yaml_raises(tmp_path):
    cfg = tmp_path / "pipeline.yaml"
    cfg.write_text("- not-a-mapping\n- still-not-a-mapping\n")

    with pytest.raises(TypeError, match="top-level mapping"):
        load_spec(cfg)
