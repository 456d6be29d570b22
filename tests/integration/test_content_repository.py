"""
Integration tests for reading and saving the content tree.

Run: pytest tests/integration/test_content_repository.py -v
"""

import sys
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest
import sqlalchemy as sa

from models.catalog import CONTENT_KEYS
from repositories.content_repository import ContentRepository
from utils.content_codec import default_settings
from utils.errors import ContentReadError, ContentWriteError


def _strip_created_at(items):
    return [{key: value for key, value in item.items() if key != "createdAt"} for item in items]


def _count(engine, table_name):
    with engine.connect() as conn:
        return conn.execute(sa.text(f"SELECT COUNT(*) FROM {table_name}")).scalar_one()


WEAPONS = [
    {
        "id": "w1",
        "name": "AR-15",
        "category": "Rifle",
        "description": "Reliable all-rounder",
        "image": "data:image/webp;base64,AAAA",
        "stats": {"damage": 30, "range": 70, "fireRate": 80},
        "attachments": [{"name": "Red Dot", "slot": "optic"}],
    },
    {
        "id": "w2",
        "name": "M870",
        "category": "Shotgun",
        "description": "",
        "image": "",
        "stats": {"damage": 90, "range": 10},
        "attachments": [],
    },
]


@pytest.fixture
def repository(reconciled_engine):
    return ContentRepository(reconciled_engine, max_workers=2)


class TestRead:

    def test_fresh_database_has_every_key(self, repository):
        tree = repository.fetch_all()

        assert list(tree) == list(CONTENT_KEYS)
        assert tree["news"] == []
        assert tree["weapons"] == []
        assert tree["privacy"] == {"title": "", "lastUpdated": "", "sections": []}
        assert tree["terms"] == {"title": "", "lastUpdated": "", "sections": []}

    def test_fresh_database_has_default_settings(self, repository):
        settings_obj = repository.fetch_all()["settings"]

        assert settings_obj == default_settings()
        assert set(settings_obj["branding"]) >= {"siteName", "logoUrl", "copyrightText"}
        assert settings_obj["seo"]["defaultKeywords"] == []

    def test_failed_query_raises(self, engine):
        # Tables were never created
        with pytest.raises(ContentReadError):
            ContentRepository(engine, max_workers=2).fetch_all()

    def test_fetch_single_collection(self, repository):
        repository.save_all({"weapons": WEAPONS})
        assert _strip_created_at(repository.fetch_collection("weapons")) == WEAPONS

    def test_legacy_integer_ids_come_back_as_strings(self, repository, reconciled_engine):
        with reconciled_engine.begin() as conn:
            conn.execute(sa.text("INSERT INTO faq (id, question, answer) VALUES (42, 'Q', 'A')"))

        faq = repository.fetch_all()["faq"]

        assert faq[0]["id"] == "42"

    def test_legacy_keyword_string_is_split(self, repository, reconciled_engine):
        with reconciled_engine.begin() as conn:
            conn.execute(sa.text(
                "INSERT INTO settings (id, seo_keywords) VALUES ('main_settings', 'fps, tactical')"
            ))

        assert repository.fetch_all()["settings"]["seo"]["defaultKeywords"] == ["fps", "tactical"]


class TestSave:

    def test_news_and_empty_classes(self, repository, reconciled_engine):
        repository.save_all({"classes": [{"id": "c1", "name": "JUGGERNAUT"}]})

        repository.save_all({
            "news": [{
                "id": "n1",
                "title": "Patch 1.2",
                "date": "2024-01-01",
                "description": "",
                "content": "",
                "image": "",
                "tag": "Update",
            }],
            "classes": [],
        })
        tree = repository.fetch_all()

        assert len(tree["news"]) == 1
        assert tree["news"][0]["id"] == "n1"
        assert tree["news"][0]["title"] == "Patch 1.2"
        assert tree["classes"] == []
        assert _count(reconciled_engine, "classes") == 0

    def test_structured_fields_round_trip(self, repository):
        game_modes = [{
            "id": "gm1",
            "name": "Breach",
            "shortName": "BR",
            "description": "Attack and defend",
            "rules": ["No respawns", "Plant or defuse"],
            "image": "",
            "media": [{"type": "video", "src": "https://example.com/breach.mp4"}],
            "playerCount": "5v5",
            "roundTime": "2:30",
        }]
        maps = [{
            "id": "m1",
            "name": "Harbor",
            "description": "Docks at night",
            "size": "Medium",
            "environment": "Urban",
            "image": "",
            "media": [{"type": "image", "src": "harbor.webp"}],
        }]

        repository.save_all({"weapons": WEAPONS, "gameModes": game_modes, "maps": maps})
        tree = repository.fetch_all()

        assert _strip_created_at(tree["weapons"]) == WEAPONS
        assert _strip_created_at(tree["gameModes"]) == game_modes
        assert _strip_created_at(tree["maps"]) == maps

    def test_submitted_order_is_kept(self, repository):
        faq = [{"id": f"f{n}", "question": f"Q{n}", "answer": "A"} for n in (3, 1, 2)]

        repository.save_all({"faq": faq})

        assert [item["id"] for item in repository.fetch_all()["faq"]] == ["f3", "f1", "f2"]

    def test_created_at_is_filled_and_kept(self, repository):
        repository.save_all({"faq": [
            {"id": "f1", "question": "Q", "answer": "A"},
            {"id": "f2", "question": "Q", "answer": "A", "createdAt": "2023-05-06T07:08:09Z"},
        ]})
        faq = repository.fetch_all()["faq"]

        assert faq[0]["createdAt"]
        assert faq[1]["createdAt"] == "2023-05-06T07:08:09"

    def test_missing_ids_are_generated(self, repository):
        repository.save_all({"media": [{"type": "image", "title": "Shot", "src": "a.webp"}]})
        media = repository.fetch_all()["media"]

        assert len(media[0]["id"]) == 36

    def test_omitted_key_leaves_domain_untouched(self, repository):
        repository.save_all({"weapons": WEAPONS})
        before = repository.fetch_all()["weapons"]

        repository.save_all({"news": [{"id": "n1", "title": "Only news"}]})

        assert repository.fetch_all()["weapons"] == before

    def test_failed_batch_rolls_back_every_domain(self, repository):
        repository.save_all({
            "news": [{"id": "n1", "title": "Original"}],
            "weapons": WEAPONS,
            "privacy": {"title": "Privacy", "lastUpdated": "Jan", "sections": []},
        })
        before = repository.fetch_all()

        duplicate_ids = [dict(WEAPONS[0]), dict(WEAPONS[0])]
        with pytest.raises(ContentWriteError):
            repository.save_all({
                "news": [{"id": "n2", "title": "Replacement"}],
                "privacy": {"title": "Changed", "lastUpdated": "Feb", "sections": []},
                "weapons": duplicate_ids,
                "settings": {"branding": {"siteName": "Changed"}},
            })

        assert repository.fetch_all() == before

    def test_bad_shape_is_rejected(self, repository):
        with pytest.raises(ContentWriteError):
            repository.save_all({"news": {"id": "n1"}})
        with pytest.raises(ContentWriteError):
            repository.save_all(["news"])

    @pytest.mark.parametrize("settings_obj", [
        {"seo": ["fps"]},
        {"branding": "Shadows"},
        {"seo": {"defaultKeywords": 5}},
        "not an object",
    ])
    def test_malformed_settings_are_rejected(self, repository, settings_obj):
        repository.save_all({"settings": default_settings()})
        before = repository.fetch_all()["settings"]

        with pytest.raises(ContentWriteError):
            repository.save_all({"settings": settings_obj})

        assert repository.fetch_all()["settings"] == before


class TestPagesAndSettings:

    def test_pages_round_trip(self, repository):
        privacy = {
            "title": "Privacy Policy",
            "lastUpdated": "August 2024",
            "sections": [{"heading": "1. Introduction", "content": "We respect your privacy."}],
        }

        repository.save_all({"privacy": privacy})
        tree = repository.fetch_all()

        assert tree["privacy"] == privacy
        assert tree["terms"] == {"title": "", "lastUpdated": "", "sections": []}

    def test_null_page_removes_it(self, repository, reconciled_engine):
        repository.save_all({"terms": {"title": "Terms", "lastUpdated": "", "sections": []}})

        repository.save_all({"terms": None})

        assert repository.fetch_all()["terms"]["title"] == ""
        assert _count(reconciled_engine, "pages") == 0

    def test_settings_upsert_keeps_single_row(self, repository, reconciled_engine):
        first = default_settings()
        first["branding"]["siteName"] = "Shadows of Soldiers"
        second = default_settings()
        second["branding"]["siteName"] = "SoS"
        second["seo"]["defaultKeywords"] = ["fps"]
        second["hero"] = {"title": "Enter the shadows"}

        repository.save_all({"settings": first})
        repository.save_all({"settings": second})

        assert repository.fetch_all()["settings"] == second
        assert _count(reconciled_engine, "settings") == 1

    def test_partial_settings_are_defaulted(self, repository):
        repository.save_all({"settings": {"theme": {"primary": "#c00"}}})
        settings_obj = repository.fetch_all()["settings"]

        assert settings_obj["theme"] == {"primary": "#c00"}
        assert settings_obj["branding"]["siteName"] == ""
        assert settings_obj["socialLinks"] == []
