import asyncio
from datetime import datetime, timedelta, timezone

import pytest
from PIL import Image

from conftest import FixedClassifier, png_bytes
from plantpal.modules.diagnosis.domain.models.classification import (
    ClassificationResult,
    Prediction,
    top_prediction,
)
from plantpal.modules.diagnosis.domain.models.diagnosis_record import DiagnosisRecord, DiagnosisStats
from plantpal.modules.diagnosis.domain.services.care_guide import DEFAULT_RECOMMENDATIONS
from plantpal.modules.diagnosis.domain.services.diagnosis_service import DiagnosisService
from plantpal.modules.diagnosis.infrastructure.classifiers.mock_classifier import MockDiseaseClassifier
from plantpal.modules.diagnosis.infrastructure.memory import InMemoryDiagnosisRecordRepository
from plantpal.shared.core.exceptions import (
    ClassificationError,
    FileTooLargeError,
    InvalidFileTypeError,
    NotFoundError,
    ValidationError,
)
from plantpal.shared.infrastructure.storage.file_manager import FileManager

USER = "user-1"


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def file_manager(upload_dir):
    return FileManager(str(upload_dir), max_size=1024 * 1024)


def make_service(file_manager, classifier=None, timeout: float = 5.0) -> DiagnosisService:
    return DiagnosisService(
        classifier or FixedClassifier(),
        InMemoryDiagnosisRecordRepository(),
        file_manager,
        classifier_timeout=timeout,
    )


# =============================================================================
# CLASSIFICATION MODELS
# =============================================================================

def test_top_prediction_first_label_wins_tie():
    distribution = [
        Prediction(disease="late_blight", confidence=0.4),
        Prediction(disease="healthy", confidence=0.4),
        Prediction(disease="leaf_mold", confidence=0.2),
    ]
    assert top_prediction(distribution).disease == "late_blight"


def test_top_prediction_requires_distribution():
    with pytest.raises(ValueError):
        top_prediction([])


def test_ranked_keeps_label_order_for_ties():
    result = ClassificationResult.from_distribution([
        Prediction(disease="a", confidence=0.1),
        Prediction(disease="b", confidence=0.6),
        Prediction(disease="c", confidence=0.1),
    ])
    assert result.disease == "b"
    assert [p.disease for p in result.ranked()] == ["b", "a", "c"]


def test_mock_classifier_peaks_on_one_label():
    labels = ["healthy", "early_blight", "late_blight", "leaf_mold"]
    classifier = MockDiseaseClassifier(labels, seed=7)

    for _ in range(20):
        result = run(classifier.classify(b"image"))
        assert [p.disease for p in result.distribution] == labels
        assert 0.7 <= result.confidence < 1.0
        others = [p.confidence for p in result.distribution if p.disease != result.disease]
        assert all(0.0 <= c < 0.2 for c in others)


def test_mock_classifier_is_reproducible_with_seed():
    first = run(MockDiseaseClassifier(["a", "b", "c"], seed=42).classify(b""))
    second = run(MockDiseaseClassifier(["a", "b", "c"], seed=42).classify(b""))
    assert first == second


def test_mock_classifier_needs_labels():
    with pytest.raises(ValueError):
        MockDiseaseClassifier([])


# =============================================================================
# UPLOAD VALIDATION
# =============================================================================

def test_validate_image_accepts_png(file_manager):
    assert file_manager.validate_image("Leaf.PNG", "image/png", png_bytes()) == "png"


@pytest.mark.parametrize(
    "filename, content_type, data, error",
    [
        ("leaf.png", "image/png", b"", ValidationError),
        ("leaf.bmp", "image/png", None, InvalidFileTypeError),
        ("leaf", "image/png", None, InvalidFileTypeError),
        ("leaf.png", "text/plain", None, InvalidFileTypeError),
        ("leaf.png", None, None, InvalidFileTypeError),
        ("leaf.png", "image/png", b"definitely not an image", InvalidFileTypeError),
    ],
)
def test_validate_image_rejects(file_manager, filename, content_type, data, error):
    with pytest.raises(error):
        file_manager.validate_image(filename, content_type, png_bytes() if data is None else data)


def test_validate_image_rejects_oversized(upload_dir):
    data = png_bytes()
    manager = FileManager(str(upload_dir), max_size=len(data) - 1)

    with pytest.raises(FileTooLargeError) as exc_info:
        manager.validate_image("leaf.png", "image/png", data)
    assert exc_info.value.error_code == "FILE_TOO_LARGE"
    assert exc_info.value.status_code == 400


@pytest.mark.parametrize("max_pixels", [16, 40])
def test_validate_image_rejects_pixel_floods(file_manager, monkeypatch, max_pixels):
    # 64 pixels: a limit of 40 only warns, a limit of 16 is a hard error
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", max_pixels)

    with pytest.raises(InvalidFileTypeError):
        file_manager.validate_image("leaf.png", "image/png", png_bytes())


def test_temporary_upload_is_removed(file_manager, upload_dir):
    async def scenario():
        async with file_manager.temporary_upload(b"bytes", "png") as path:
            assert path.exists()
            assert path.parent == upload_dir
            assert path.name.startswith("image-")
            return path

    path = run(scenario())
    assert not path.exists()


def test_temporary_upload_is_removed_on_error(file_manager, upload_dir):
    async def scenario():
        async with file_manager.temporary_upload(b"bytes", "png"):
            raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        run(scenario())
    assert list(upload_dir.iterdir()) == []


# =============================================================================
# IMAGE ANALYSIS
# =============================================================================

def test_analyze_upload_returns_ranked_diagnosis(file_manager, upload_dir):
    classifier = FixedClassifier()
    data = png_bytes()

    diagnosis = run(make_service(file_manager, classifier).analyze_upload("leaf.png", "image/png", data))

    assert diagnosis.disease == "early_blight"
    assert diagnosis.confidence == 0.85
    assert [p.disease for p in diagnosis.predictions] == ["early_blight", "healthy", "late_blight"]
    assert diagnosis.recommendations
    assert diagnosis.plant_info["name"]
    assert classifier.seen == [data]
    assert list(upload_dir.iterdir()) == []


def test_analyze_upload_unknown_label_gets_general_advice(file_manager):
    classifier = FixedClassifier(scores={"mystery_rot": 0.9, "healthy": 0.1})
    diagnosis = run(make_service(file_manager, classifier).analyze_upload("leaf.png", "image/png", png_bytes()))
    assert diagnosis.recommendations == DEFAULT_RECOMMENDATIONS


def test_classifier_failure_cleans_up(file_manager, upload_dir):
    service = make_service(file_manager, FixedClassifier(error=RuntimeError("model crashed")))

    with pytest.raises(ClassificationError) as exc_info:
        run(service.analyze_upload("leaf.png", "image/png", png_bytes()))
    assert exc_info.value.status_code == 500
    assert list(upload_dir.iterdir()) == []


def test_classifier_timeout(file_manager, upload_dir):
    class SlowClassifier(FixedClassifier):
        async def classify(self, image_bytes):
            await asyncio.sleep(5)

    service = make_service(file_manager, SlowClassifier(), timeout=0.05)
    with pytest.raises(ClassificationError):
        run(service.analyze_upload("leaf.png", "image/png", png_bytes()))
    assert list(upload_dir.iterdir()) == []


def test_invalid_upload_never_reaches_classifier(file_manager):
    classifier = FixedClassifier()
    with pytest.raises(InvalidFileTypeError):
        run(make_service(file_manager, classifier).analyze_upload("notes.txt", "text/plain", b"hello"))
    assert classifier.seen == []


# =============================================================================
# SAVED RECORDS
# =============================================================================

def test_create_record_with_predictions_and_epoch_timestamp(file_manager):
    service = make_service(file_manager)
    record = run(service.create_record(USER, {
        "disease": " leaf_mold ",
        "confidence": 0.6,
        "predictions": [{"disease": "leaf_mold", "confidence": 0.6}, {"disease": "healthy", "confidence": 0.3}],
        "timestamp": 1700000000000,
    }))

    assert record.disease == "leaf_mold"
    assert [p.disease for p in record.predictions] == ["leaf_mold", "healthy"]
    assert record.timestamp == datetime.fromtimestamp(1700000000, tz=timezone.utc)


@pytest.mark.parametrize(
    "fields",
    [
        {"confidence": 0.5},
        {"disease": "rust"},
        {"disease": "rust", "confidence": 2},
        {"disease": "rust", "confidence": True},
        {"disease": "rust", "confidence": 0.5, "predictions": [{"confidence": 0.5}]},
        {"disease": "rust", "confidence": 0.5, "timestamp": "yesterday"},
        {"disease": "rust", "confidence": 0.5, "timestamp": 1e20},
        {"disease": "rust", "confidence": 0.5, "timestamp": float("nan")},
        {"disease": "rust", "confidence": 0.5, "timestamp": -1e18},
    ],
)
def test_create_record_validates(file_manager, fields):
    with pytest.raises(ValidationError):
        run(make_service(file_manager).create_record(USER, fields))


def test_records_are_scoped_and_newest_first(file_manager):
    service = make_service(file_manager)
    base = datetime(2024, 5, 1, tzinfo=timezone.utc)

    async def scenario():
        old = await service.create_record(USER, {"disease": "rust", "confidence": 0.5, "timestamp": base.isoformat()})
        new = await service.create_record(
            USER, {"disease": "healthy", "confidence": 0.9, "timestamp": (base + timedelta(days=1)).isoformat()}
        )
        await service.create_record("someone-else", {"disease": "rust", "confidence": 0.5})
        return old, new, await service.history(USER)

    old, new, history = run(scenario())
    assert [record.record_id for record in history] == [new.record_id, old.record_id]

    with pytest.raises(NotFoundError):
        run(service.get_record(old.record_id, "someone-else"))
    with pytest.raises(NotFoundError):
        run(service.delete_record(old.record_id, "someone-else"))

    assert run(service.get_record(old.record_id, USER)).disease == "rust"
    run(service.delete_record(old.record_id, USER))
    with pytest.raises(NotFoundError):
        run(service.get_record(old.record_id, USER))


def test_stats(file_manager):
    service = make_service(file_manager)

    async def scenario():
        for disease, confidence in [("healthy", 0.9), ("rust", 0.6), ("rust", 0.7), ("Healthy", 0.5)]:
            await service.create_record(USER, {"disease": disease, "confidence": confidence})
        return await service.stats(USER)

    stats = run(scenario())
    assert stats.total_diagnoses == 4
    assert stats.healthy_count == 1
    assert stats.diseased_count == 3
    assert stats.most_common_disease == "rust"
    assert stats.average_confidence == 0.675


def test_stats_without_records(file_manager):
    stats = run(make_service(file_manager).stats(USER))
    assert (stats.total_diagnoses, stats.most_common_disease, stats.average_confidence) == (0, None, 0.0)


def test_stats_tie_goes_to_oldest_label():
    start = datetime(2024, 5, 1, tzinfo=timezone.utc)
    records = [
        DiagnosisRecord(user_id=USER, disease="healthy", confidence=0.9, timestamp=start + timedelta(days=3)),
        DiagnosisRecord(user_id=USER, disease="rust", confidence=0.5, timestamp=start + timedelta(days=2)),
        DiagnosisRecord(user_id=USER, disease="healthy", confidence=0.8, timestamp=start + timedelta(days=1)),
        DiagnosisRecord(user_id=USER, disease="rust", confidence=0.6, timestamp=start),
    ]

    assert DiagnosisStats.from_records(records).most_common_disease == "rust"
    assert DiagnosisStats.from_records(list(reversed(records))).most_common_disease == "rust"
