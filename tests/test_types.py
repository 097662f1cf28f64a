"""Tests for batches, mutations, key pages and config."""

import dataclasses

import pytest

from kvdb import Batch, Config, ConfigBuilder, KeyList, Mutation, MutationOp


class TestBatch:
    def test_empty(self):
        batch = Batch()
        assert len(batch) == 0
        assert list(batch) == []

    def test_preserves_order(self):
        batch = Batch()
        batch.insert(b"age", b"25")
        batch.insert(b"city", b"anytown")
        batch.remove(b"name")
        assert [m.op for m in batch] == [
            MutationOp.INSERT,
            MutationOp.INSERT,
            MutationOp.REMOVE,
        ]
        assert [m.key for m in batch] == [b"age", b"city", b"name"]
        assert batch.ops[0].value == b"25"
        assert batch.ops[2].value is None

    def test_chaining(self):
        batch = Batch().insert(b"a", b"1").remove(b"b")
        assert len(batch) == 2

    def test_effects_last_writer_wins(self):
        batch = Batch().insert(b"k", b"1").remove(b"k").insert(b"k", b"2")
        batch.insert(b"gone", b"x").remove(b"gone")
        assert batch.effects() == {b"k": b"2", b"gone": None}

    def test_copies_bytearray(self):
        key = bytearray(b"k")
        batch = Batch().insert(key, memoryview(b"v"))
        key[0] = ord("z")
        assert batch.ops[0].key == b"k"
        assert batch.ops[0].value == b"v"

    def test_rejects_non_bytes(self):
        with pytest.raises(TypeError, match="Expected bytes"):
            Batch().insert("k", b"v")  # type: ignore
        with pytest.raises(TypeError, match="Expected bytes for value"):
            Batch().insert(b"k", "v")  # type: ignore


class TestMutation:
    def test_insert_requires_value(self):
        with pytest.raises(ValueError):
            Mutation(MutationOp.INSERT, b"k")

    def test_remove_rejects_value(self):
        with pytest.raises(ValueError):
            Mutation(MutationOp.REMOVE, b"k", b"v")


class TestConfigBuilder:
    def test_defaults(self):
        config = ConfigBuilder().build()
        assert config == Config(path="./db", read_only=False)

    def test_fluent(self):
        builder = ConfigBuilder()
        assert builder.path("/dev/null") is builder
        assert builder.read_only(True) is builder
        assert builder.build() == Config(path="/dev/null", read_only=True)

    def test_read_only_false_is_kept(self):
        config = ConfigBuilder().read_only(False).build()
        assert config.read_only is False

    def test_config_is_frozen(self):
        config = ConfigBuilder().build()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.path = "/elsewhere"  # type: ignore


def test_key_list_defaults():
    page = KeyList()
    assert page.keys == []
    assert page.list_end is True
