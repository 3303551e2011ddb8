from __future__ import annotations

from pathlib import Path

from ccc_cli.sources import SourceItem, Tier, list_combined_items, merge_tiers, scan_tier


def _item(name: str, tier: Tier) -> SourceItem:
    return SourceItem(name=name, path=Path(f"/{tier.value}/{name}"), tier=tier)


class TestMergeTiers:
    def test_override_replaces_and_moves_to_override_position(self):
        base = [_item("a", Tier.BASE), _item("b", Tier.BASE), _item("c", Tier.BASE)]
        override = [_item("b", Tier.OVERRIDE), _item("d", Tier.OVERRIDE)]

        merged = merge_tiers(base, override)

        assert [(i.name, i.tier) for i in merged] == [
            ("a", Tier.BASE),
            ("c", Tier.BASE),
            ("b", Tier.OVERRIDE),
            ("d", Tier.OVERRIDE),
        ]

    def test_empty_tiers(self):
        assert merge_tiers([], []) == []


async def test_scan_tier_missing_root(tmp_path: Path):
    assert await scan_tier(tmp_path / "missing", Tier.BASE) == []


async def test_scan_tier_sorted_dirs_and_markdown_files(tmp_path: Path):
    (tmp_path / "zeta").mkdir()
    (tmp_path / "alpha").mkdir()
    (tmp_path / "beta.md").write_text("x", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("x", encoding="utf-8")

    dirs_only = await scan_tier(tmp_path, Tier.BASE)
    assert [i.name for i in dirs_only] == ["alpha", "zeta"]

    with_files = await scan_tier(tmp_path, Tier.OVERRIDE, support_files=True)
    assert [i.name for i in with_files] == ["alpha", "beta", "zeta"]
    assert all(i.tier is Tier.OVERRIDE for i in with_files)
    assert with_files[1].path == tmp_path / "beta.md"


async def test_list_combined_items(tmp_path: Path):
    base = tmp_path / "base"
    override = tmp_path / "override"
    base.mkdir()
    override.mkdir()
    (base / "one.md").write_text("x", encoding="utf-8")
    (base / "two.md").write_text("x", encoding="utf-8")
    (override / "one.md").write_text("y", encoding="utf-8")

    items = await list_combined_items(base, override, support_files=True)

    assert [(i.name, i.tier) for i in items] == [("two", Tier.BASE), ("one", Tier.OVERRIDE)]
    assert items[1].path == override / "one.md"
