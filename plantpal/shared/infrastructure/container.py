# 📄 File: plantpal/shared/infrastructure/container.py

# 🧭 Purpose (Layman Explanation):
# The app's wiring closet: it builds every service PlantPal needs once, plugs in
# either memory or database storage, and switches it all on and off cleanly.

# 🧪 Purpose (Technical Summary):
# Composition root. Selects repository providers from STORAGE_BACKEND, builds
# domain services and external clients, and owns the startup/shutdown lifecycle
# (table creation, sample seeding, engine disposal, HTTP client closing).

# 🔗 Dependencies:
# - Settings, SecurityManager
# - Every module's domain services and infrastructure providers

# 🔄 Connected Modules / Calls From:
# - plantpal.main (create_application, lifespan)
# - plantpal.shared.core.dependencies (request-time access through app.state)

import logging
from typing import Optional

import httpx

from plantpal.modules.community.domain.services.augmenter import SearchAugmenter
from plantpal.modules.community.domain.services.community_service import CommunityService
from plantpal.modules.community.infrastructure.augmenters import NullSearchAugmenter, OpenAISearchAugmenter
from plantpal.modules.community.infrastructure.database import PostRepositoryImpl
from plantpal.modules.community.infrastructure.memory import InMemoryPostRepository
from plantpal.modules.diagnosis.domain.services.classifier import DiseaseClassifier
from plantpal.modules.diagnosis.domain.services.diagnosis_service import DiagnosisService
from plantpal.modules.diagnosis.infrastructure.classifiers import MockDiseaseClassifier
from plantpal.modules.diagnosis.infrastructure.database import DiagnosisRecordRepositoryImpl
from plantpal.modules.diagnosis.infrastructure.memory import InMemoryDiagnosisRecordRepository
from plantpal.modules.plant_management.domain.services.plant_service import PlantService
from plantpal.modules.plant_management.infrastructure.database import PlantRepositoryImpl
from plantpal.modules.plant_management.infrastructure.memory import InMemoryPlantRepository
from plantpal.modules.user_management.domain.services.auth_service import AuthService
from plantpal.modules.user_management.infrastructure.database import UserRepositoryImpl
from plantpal.modules.user_management.infrastructure.external.oauth_providers import OAuthProviderManager
from plantpal.modules.user_management.infrastructure.memory import InMemoryUserRepository
from plantpal.shared.config.settings import Settings
from plantpal.shared.core.security import SecurityManager
from plantpal.shared.infrastructure.database.connection import DatabaseConnectionManager
from plantpal.shared.infrastructure.database.session import DatabaseSessionManager
from plantpal.shared.infrastructure.external_apis.llm_client import ChatCompletionClient
from plantpal.shared.infrastructure.storage.file_manager import FileManager

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Holds every long-lived collaborator of one application instance.

    Nothing here is module-global: two applications built in the same process
    (as tests do) never share state.
    """

    def __init__(
        self,
        settings: Settings,
        security: SecurityManager,
        auth_service: AuthService,
        plant_service: PlantService,
        diagnosis_service: DiagnosisService,
        community_service: CommunityService,
        oauth_manager: OAuthProviderManager,
        database: Optional[DatabaseConnectionManager] = None,
        chat_client: Optional[ChatCompletionClient] = None,
    ):
        self.settings = settings
        self.security = security
        self.auth_service = auth_service
        self.plant_service = plant_service
        self.diagnosis_service = diagnosis_service
        self.community_service = community_service
        self.oauth_manager = oauth_manager
        self.database = database
        self.chat_client = chat_client
        self.started = False

    @property
    def storage_backend(self) -> str:
        return "database" if self.database is not None else "memory"

    async def startup(self) -> None:
        """Prepare storage and seed data."""
        if self.started:
            return
        if self.database is not None and self.settings.DB_AUTO_CREATE:
            await self.database.create_tables()
        if self.settings.SEED_SAMPLE_POSTS:
            await self.community_service.seed_sample_posts()
        self.started = True
        logger.info(f"Service container started with {self.storage_backend} storage")

    async def shutdown(self) -> None:
        """Release connections and HTTP clients."""
        if self.chat_client is not None:
            await self.chat_client.aclose()
        if self.database is not None:
            await self.database.close()
        self.started = False
        logger.info("Service container shut down")


def build_container(
    settings: Settings,
    augmenter: Optional[SearchAugmenter] = None,
    classifier: Optional[DiseaseClassifier] = None,
    http_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ServiceContainer:
    """
    Build a ServiceContainer from settings.

    Args:
        settings: Application settings
        augmenter: Search augmenter to use instead of the configured one
        classifier: Disease classifier to use instead of the mock classifier
        http_transport: httpx transport for OAuth and chat-completion calls

    Returns:
        ServiceContainer: Unstarted container
    """
    security = SecurityManager(settings)
    database: Optional[DatabaseConnectionManager] = None

    if settings.uses_database:
        database = DatabaseConnectionManager(settings)
        sessions = DatabaseSessionManager(database)
        user_repository = UserRepositoryImpl(sessions)
        plant_repository = PlantRepositoryImpl(sessions)
        post_repository = PostRepositoryImpl(sessions)
        record_repository = DiagnosisRecordRepositoryImpl(sessions)
    else:
        user_repository = InMemoryUserRepository()
        plant_repository = InMemoryPlantRepository()
        post_repository = InMemoryPostRepository()
        record_repository = InMemoryDiagnosisRecordRepository()

    chat_client: Optional[ChatCompletionClient] = None
    if augmenter is None:
        if settings.augmenter_enabled:
            chat_client = ChatCompletionClient(
                api_key=settings.OPENAI_API_KEY,
                api_url=settings.OPENAI_API_URL,
                model=settings.OPENAI_MODEL,
                timeout=settings.AUGMENTER_TIMEOUT_SECONDS,
                transport=http_transport,
            )
            augmenter = OpenAISearchAugmenter(chat_client)
        else:
            augmenter = NullSearchAugmenter()

    if classifier is None:
        classifier = MockDiseaseClassifier(settings.diagnosis_labels_list, seed=settings.CLASSIFIER_SEED)

    file_manager = FileManager(
        upload_dir=settings.UPLOAD_DIR,
        max_size=settings.MAX_UPLOAD_SIZE,
        allowed_extensions=settings.allowed_image_extensions_list,
    )

    container = ServiceContainer(
        settings=settings,
        security=security,
        auth_service=AuthService(user_repository, security),
        plant_service=PlantService(plant_repository),
        diagnosis_service=DiagnosisService(
            classifier=classifier,
            record_repository=record_repository,
            file_manager=file_manager,
            classifier_timeout=settings.CLASSIFIER_TIMEOUT_SECONDS,
        ),
        community_service=CommunityService(
            post_repository=post_repository,
            augmenter=augmenter,
            augmenter_timeout=settings.AUGMENTER_TIMEOUT_SECONDS,
        ),
        oauth_manager=OAuthProviderManager(settings, transport=http_transport),
        database=database,
        chat_client=chat_client,
    )
    logger.info(
        f"Built service container: storage={container.storage_backend}, "
        f"augmenter={type(augmenter).__name__}, classifier={type(classifier).__name__}"
    )
    return container
