import dataclasses
import logging
from pathlib import Path

import pytest
import torch

from albert_encoder.models.config import AlbertConfig, load_model_config
from albert_encoder.models.encoder import AlbertEncoder
from albert_encoder.models.factory import build_encoder, count_parameters

CONFIG_DIR = Path(__file__).resolve().parents[2] / "configs" / "model"


class TestAlbertConfig:
    def test_defaults_match_albert_base(self):
        config = AlbertConfig()
        assert config.hidden_size == 768
        assert config.embedding_size == 128
        assert config.layer_norm_eps == 1e-12
        assert config.hidden_act == "gelu_new"
        assert config.output_hidden_states is False
        assert config.output_attentions is False

    @pytest.mark.parametrize(
        "overrides",
        [
            {"num_hidden_groups": 0},
            {"hidden_size": 10, "num_attention_heads": 3},
            {"hidden_dropout_prob": 1.5},
            {"hidden_act": "tanh"},
            {"inner_group_num": 0},
            {"layer_norm_eps": 0.0},
        ],
    )
    def test_invalid_values_raise(self, overrides):
        with pytest.raises(ValueError):
            AlbertConfig(**overrides)

    def test_from_dict_ignores_unknown_keys_and_null_eps(self):
        config = AlbertConfig.from_dict(
            {"hidden_size": 64, "num_attention_heads": 4, "layer_norm_eps": None, "architectures": ["x"]}
        )
        assert config.hidden_size == 64
        assert config.layer_norm_eps == 1e-12


class TestLoadModelConfig:
    def test_none_gives_defaults(self):
        assert load_model_config(None) == AlbertConfig()

    def test_tiny_preset(self):
        config = load_model_config(CONFIG_DIR / "tiny.yaml")
        assert config.num_hidden_layers == 6
        assert config.num_hidden_groups == 2
        assert config.inner_group_num == 2
        # Not set in the file
        assert config.layer_norm_eps == 1e-12

    def test_base_preset_matches_defaults(self):
        assert load_model_config(CONFIG_DIR / "base.yaml") == AlbertConfig()

    def test_flat_mapping(self, tmp_path):
        path = tmp_path / "model.yaml"
        path.write_text("hidden_size: 32\nnum_attention_heads: 2\n", encoding="utf-8")
        config = load_model_config(path)
        assert config.hidden_size == 32


class TestBuildEncoder:
    def test_from_yaml_path(self):
        encoder = build_encoder(CONFIG_DIR / "tiny.yaml")
        assert isinstance(encoder, AlbertEncoder)
        assert len(encoder.encoder.albert_layer_groups) == 2

        encoder.eval()
        out = encoder(torch.randint(1, 100, (2, 5)))
        assert out.last_hidden_state.shape == (2, 5, 32)

    def test_logs_model_size(self, tiny_config, caplog):
        with caplog.at_level(logging.INFO, logger="albert_encoder.models.factory"):
            encoder = build_encoder(tiny_config)
        assert str(count_parameters(encoder)) in caplog.text

    def test_parameter_count_independent_of_depth(self, tiny_config):
        """Depth steps reuse group parameters, so deeper stacks cost nothing extra."""
        shallow = build_encoder(tiny_config)
        deep = build_encoder(dataclasses.replace(tiny_config, num_hidden_layers=12))
        assert count_parameters(shallow) == count_parameters(deep)
