import asyncio
from datetime import datetime, timezone

from conftest import FakeAugmenter, FixedClassifier, make_settings
from plantpal.modules.user_management.domain.models.user import FederatedProfile
from plantpal.shared.infrastructure.container import build_container


def database_settings(tmp_path):
    return make_settings(
        UPLOAD_DIR=str(tmp_path / "uploads"),
        STORAGE_BACKEND="database",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'plantpal.db'}",
        DB_AUTO_CREATE=True,
    )


def run_with_container(tmp_path, scenario, augmenter=None):
    async def runner():
        container = build_container(
            database_settings(tmp_path),
            augmenter=augmenter or FakeAugmenter(),
            classifier=FixedClassifier(),
        )
        await container.startup()
        try:
            return await scenario(container)
        finally:
            await container.shutdown()

    return asyncio.run(runner())


def test_database_health_check(tmp_path):
    async def scenario(container):
        assert container.storage_backend == "database"
        return await container.database.health_check()

    assert run_with_container(tmp_path, scenario)["status"] == "healthy"


def test_users_persist_and_link_federated_identities(tmp_path):
    async def scenario(container):
        auth = container.auth_service
        user = await auth.register("gardener", "Gardener@Example.com", "secret123")
        logged_in, token = await auth.authenticate("gardener@example.com", "secret123")
        assert logged_in.user_id == user.user_id
        _, verified = await auth.verify(token)
        assert verified.username == "gardener"

        profile = FederatedProfile(provider="google", provider_id="g-1", email="gardener@example.com", name="G")
        linked = await auth.upsert_federated(profile)
        assert linked.user_id == user.user_id
        assert linked.federated_ids == {"google": "g-1"}
        found = await auth.find_federated("google", "g-1")
        assert found.user_id == user.user_id

        newcomer = await auth.upsert_federated(
            FederatedProfile(provider="facebook", provider_id="fb-7", name="gardener")
        )
        assert newcomer.username == "gardener2"

    run_with_container(tmp_path, scenario)


def test_plants_and_diagnosis_history_persist(tmp_path):
    async def scenario(container):
        owner = await container.auth_service.register("owner", "owner@example.com", "secret123")
        plants = container.plant_service

        plant = await plants.create(owner.user_id, {"name": "Tomato", "location": "Greenhouse"})
        await plants.create(owner.user_id, {"name": "Fern"})
        entry, updated = await plants.append_diagnosis(plant.plant_id, owner.user_id, "early_blight", 0.85)
        assert updated.health_status == "Diseased"
        assert updated.last_diagnosis.entry_id == entry.entry_id

        await plants.append_diagnosis(plant.plant_id, owner.user_id, "healthy", 0.95, notes="recovered")
        history = await plants.diagnosis_history(plant.plant_id, owner.user_id)
        assert [item.disease for item in history] == ["early_blight", "healthy"]

        reloaded = await plants.get(plant.plant_id, owner.user_id)
        assert reloaded.health_status == "Healthy"
        assert reloaded.created_at.tzinfo is not None

        summary = await plants.health_summary(owner.user_id)
        assert (summary.total, summary.healthy, summary.unknown) == (2, 1, 1)
        assert [p.name for p in await plants.search(owner.user_id, "greenhouse")] == ["Tomato"]

        await plants.delete(plant.plant_id, owner.user_id)
        assert [p.name for p in await plants.list(owner.user_id)] == ["Fern"]

    run_with_container(tmp_path, scenario)


def test_community_posts_persist(tmp_path):
    augmenter = FakeAugmenter(tags=["pests"], category="pest-control", relevance={"Aphids": 0.8})

    async def scenario(container):
        community = container.community_service
        post = await community.create("u1", "alice", "Aphids", "Neem oil spray")
        assert post.tags == ["pests"]
        assert post.category == "pest-control"

        await community.like(post.post_id)
        liked = await community.like(post.post_id)
        assert liked.likes == 2

        await community.add_comment(post.post_id, "u2", "bob", "Thanks!")
        stored = await community.get(post.post_id)
        assert stored.comment_count == len(stored.comments) == 1
        assert stored.comments[0].author_name == "bob"

        edited = await community.update(post.post_id, "u1", {"title": "Aphids"})
        assert edited.likes == 2

        outcome = await community.search("neem")
        assert [hit.post.post_id for hit in outcome.results] == [post.post_id]
        assert outcome.results[0].insights.relevance_score == 0.8

        stats = await community.stats()
        assert (stats.total_posts, stats.total_likes, stats.total_comments) == (1, 2, 1)

        await community.delete(post.post_id, "u1")
        assert await community.list() == []

    run_with_container(tmp_path, scenario, augmenter=augmenter)


def test_diagnosis_records_persist(tmp_path):
    async def scenario(container):
        diagnosis = container.diagnosis_service
        first = await diagnosis.create_record(
            "u1",
            {
                "disease": "rust",
                "confidence": 0.6,
                "predictions": [{"disease": "rust", "confidence": 0.6}],
                "plant_info": {"name": "Tomato Plant"},
                "timestamp": datetime(2024, 5, 1, tzinfo=timezone.utc),
            },
        )
        second = await diagnosis.create_record(
            "u1", {"disease": "healthy", "confidence": 0.9, "timestamp": datetime(2024, 5, 2, tzinfo=timezone.utc)}
        )
        await diagnosis.create_record("u2", {"disease": "rust", "confidence": 0.7})

        history = await diagnosis.history("u1")
        assert [record.record_id for record in history] == [second.record_id, first.record_id]
        fetched = await diagnosis.get_record(first.record_id, "u1")
        assert fetched.plant_info == {"name": "Tomato Plant"}
        assert fetched.predictions[0].disease == "rust"

        stats = await diagnosis.stats("u1")
        assert (stats.total_diagnoses, stats.healthy_count, stats.most_common_disease) == (2, 1, "rust")

        await diagnosis.delete_record(first.record_id, "u1")
        assert [record.record_id for record in await diagnosis.history("u1")] == [second.record_id]

    run_with_container(tmp_path, scenario)
