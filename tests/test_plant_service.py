import asyncio

import pytest

from plantpal.modules.plant_management.domain.models.plant import HealthStatus, derive_health_status
from plantpal.modules.plant_management.domain.services.plant_service import PlantService
from plantpal.modules.plant_management.infrastructure.memory import InMemoryPlantRepository
from plantpal.shared.core.exceptions import NotFoundError, ValidationError

OWNER = "owner-a"
OTHER = "owner-b"


@pytest.fixture
def service():
    return PlantService(InMemoryPlantRepository())


def run(coro):
    return asyncio.run(coro)


@pytest.mark.parametrize(
    "disease, confidence, expected",
    [
        ("healthy", 0.99, HealthStatus.HEALTHY),
        ("healthy_leaf", 0.2, HealthStatus.HEALTHY),
        ("early_blight", 0.85, HealthStatus.DISEASED),
        ("early_blight", 0.7, HealthStatus.SUSPICIOUS),
        ("leaf_mold", 0.3, HealthStatus.SUSPICIOUS),
        # Case-sensitive substring
        ("Healthy", 0.9, HealthStatus.DISEASED),
    ],
)
def test_health_status_rule(disease, confidence, expected):
    assert derive_health_status(disease, confidence) == expected


def test_create_applies_defaults(service):
    plant = run(service.create(OWNER, {"name": "  Basil  "}))

    assert plant.name == "Basil"
    assert plant.species == "Unknown"
    assert plant.location == "Unknown"
    assert plant.notes == ""
    assert plant.health_status == "Unknown"
    assert plant.diagnosis_history == []
    assert plant.last_diagnosis is None


@pytest.mark.parametrize("fields", [{}, {"name": ""}, {"name": "   "}, {"name": 42}])
def test_create_requires_name(service, fields):
    with pytest.raises(ValidationError):
        run(service.create(OWNER, fields))


def test_create_rejects_bad_planted_date(service):
    with pytest.raises(ValidationError):
        run(service.create(OWNER, {"name": "Basil", "planted_date": "last spring"}))


def test_diseased_after_confident_diagnosis(service):
    async def scenario():
        plant = await service.create(OWNER, {"name": "Basil"})
        await service.append_diagnosis(plant.plant_id, OWNER, "early_blight", 0.85)
        return await service.get(plant.plant_id, OWNER)

    plant = run(scenario())
    assert plant.health_status == "Diseased"
    assert len(plant.diagnosis_history) == 1
    assert plant.last_diagnosis.disease == "early_blight"


def test_healthy_substring_beats_low_confidence(service):
    async def scenario():
        plant = await service.create(OWNER, {"name": "Fern"})
        _, updated = await service.append_diagnosis(plant.plant_id, OWNER, "healthy_leaf", 0.2)
        return updated

    assert run(scenario()).health_status == "Healthy"


def test_history_grows_and_keeps_prior_entries(service):
    async def scenario():
        plant = await service.create(OWNER, {"name": "Tomato"})
        first, _ = await service.append_diagnosis(plant.plant_id, OWNER, "leaf_mold", 0.4, notes="spots")
        for confidence in (0.5, 0.9, 0.95):
            await service.append_diagnosis(plant.plant_id, OWNER, "late_blight", confidence)
        history = await service.diagnosis_history(plant.plant_id, OWNER)
        return first, history

    first, history = run(scenario())
    assert len(history) == 4
    assert history[0] == first
    assert history[0].notes == "spots"
    assert [entry.confidence for entry in history[1:]] == [0.5, 0.9, 0.95]
    assert len({entry.entry_id for entry in history}) == 4


@pytest.mark.parametrize(
    "disease, confidence",
    [("", 0.5), ("rust", 1.5), ("rust", -0.1), ("rust", "high"), ("rust", True), ("rust", False)],
)
def test_append_diagnosis_validates(service, disease, confidence):
    plant = run(service.create(OWNER, {"name": "Mint"}))
    with pytest.raises(ValidationError):
        run(service.append_diagnosis(plant.plant_id, OWNER, disease, confidence))


def test_ownership_isolation(service):
    plant = run(service.create(OWNER, {"name": "Basil", "notes": "kitchen window"}))

    with pytest.raises(NotFoundError):
        run(service.get(plant.plant_id, OTHER))
    with pytest.raises(NotFoundError):
        run(service.update(plant.plant_id, OTHER, {"name": "Stolen"}))
    with pytest.raises(NotFoundError):
        run(service.delete(plant.plant_id, OTHER))
    with pytest.raises(NotFoundError):
        run(service.append_diagnosis(plant.plant_id, OTHER, "healthy", 0.9))
    assert run(service.list(OTHER)) == []
    assert run(service.search(OTHER, "basil")) == []

    # Owner still sees the untouched plant
    assert run(service.get(plant.plant_id, OWNER)).name == "Basil"


def test_update_merges_only_given_fields(service):
    plant = run(service.create(OWNER, {"name": "Basil", "species": "Ocimum", "notes": "water daily"}))
    updated = run(service.update(plant.plant_id, OWNER, {"location": "Balcony"}))

    assert updated.plant_id == plant.plant_id
    assert updated.owner_id == OWNER
    assert updated.name == "Basil"
    assert updated.species == "Ocimum"
    assert updated.location == "Balcony"
    assert updated.notes == "water daily"
    assert updated.updated_at >= plant.updated_at


def test_delete_returns_removed_plant(service):
    plant = run(service.create(OWNER, {"name": "Basil"}))
    removed = run(service.delete(plant.plant_id, OWNER))

    assert removed.plant_id == plant.plant_id
    with pytest.raises(NotFoundError):
        run(service.get(plant.plant_id, OWNER))


def test_health_summary_counts(service):
    async def scenario():
        healthy = await service.create(OWNER, {"name": "A"})
        diseased = await service.create(OWNER, {"name": "B"})
        suspicious = await service.create(OWNER, {"name": "C"})
        await service.create(OWNER, {"name": "D"})
        await service.append_diagnosis(healthy.plant_id, OWNER, "healthy", 0.9)
        await service.append_diagnosis(diseased.plant_id, OWNER, "late_blight", 0.9)
        await service.append_diagnosis(suspicious.plant_id, OWNER, "late_blight", 0.4)
        return await service.health_summary(OWNER)

    summary = run(scenario())
    assert (summary.total, summary.healthy, summary.diseased, summary.suspicious, summary.unknown) == (4, 1, 1, 1, 1)
    assert summary.plants_needing_attention == 2


def test_search_matches_any_field_case_insensitively(service):
    async def scenario():
        await service.create(OWNER, {"name": "Basil", "location": "Kitchen"})
        await service.create(OWNER, {"name": "Fern", "notes": "Needs KITCHEN humidity"})
        await service.create(OWNER, {"name": "Cactus", "species": "Cereus"})
        return await service.search(OWNER, "kitchen")

    assert sorted(plant.name for plant in run(scenario())) == ["Basil", "Fern"]


def test_search_requires_query(service):
    with pytest.raises(ValidationError):
        run(service.search(OWNER, "  "))


def test_by_health_status_exact_match(service):
    async def scenario():
        plant = await service.create(OWNER, {"name": "Basil"})
        await service.create(OWNER, {"name": "Mint"})
        await service.append_diagnosis(plant.plant_id, OWNER, "rust", 0.95)
        return await service.by_health_status(OWNER, "Diseased"), await service.by_health_status(OWNER, "Unknown")

    diseased, unknown = run(scenario())
    assert [plant.name for plant in diseased] == ["Basil"]
    assert [plant.name for plant in unknown] == ["Mint"]

    with pytest.raises(ValidationError):
        run(service.by_health_status(OWNER, "diseased"))
