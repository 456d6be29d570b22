"""
Tests for default content seeding.

Run: pytest tests/integration/test_content_seed.py -v
"""

import sys
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from seed.content_seed import CONTENT_DATA, seed_content


class TestContentSeed:

    def test_seeds_empty_database(self, content_service):
        assert content_service.is_empty()

        assert seed_content(engine=content_service.repository.engine)

        tree = content_service.get_content()
        assert len(tree["news"]) == len(CONTENT_DATA["news"])
        assert tree["privacy"]["title"] == "Privacy Policy"
        assert tree["settings"]["branding"]["siteName"] == "Shadows of Soldiers"
        assert not content_service.is_empty()

    def test_existing_content_is_kept(self, content_service):
        content_service.save_content({"faq": [{"id": "mine", "question": "Q", "answer": "A"}]})

        assert not seed_content(engine=content_service.repository.engine)
        assert [item["id"] for item in content_service.get_content()["faq"]] == ["mine"]

    def test_force_overwrites(self, content_service):
        content_service.save_content({"faq": [{"id": "mine", "question": "Q", "answer": "A"}]})

        assert seed_content(force=True, engine=content_service.repository.engine)
        faq_ids = [item["id"] for item in content_service.get_content()["faq"]]
        assert faq_ids == [item["id"] for item in CONTENT_DATA["faq"]]
