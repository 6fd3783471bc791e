# 📄 File: plantpal/modules/community/infrastructure/augmenters/null_augmenter.py
# 🧭 Purpose (Layman Explanation):
# The "AI is switched off" helper, used when no AI key is configured
# 🧪 Purpose (Technical Summary):
# SearchAugmenter whose every call raises AugmenterUnavailableError
# 🔗 Dependencies:
# SearchAugmenter port, shared exceptions
# 🔄 Connected Modules / Calls From:
# plantpal.shared.infrastructure.container

from plantpal.shared.core.exceptions import AugmenterUnavailableError

from ...domain.services.augmenter import SearchAugmenter


class NullSearchAugmenter(SearchAugmenter):

    async def rerank(self, query, posts):
        raise AugmenterUnavailableError()

    async def suggest_tags(self, title, content):
        raise AugmenterUnavailableError()

    async def suggest_category(self, title, content):
        raise AugmenterUnavailableError()

    async def search_suggestions(self, query):
        raise AugmenterUnavailableError()

    async def community_insights(self, posts):
        raise AugmenterUnavailableError()

    async def trending_topics(self, posts):
        raise AugmenterUnavailableError()
