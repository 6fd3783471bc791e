# 📄 File: plantpal/shared/infrastructure/external_apis/__init__.py

# 🧭 Purpose (Layman Explanation):
# Tools for talking to outside services such as the hosted AI text service.

# 🧪 Purpose (Technical Summary):
# External API client exports.

# 🔗 Dependencies:
# - llm_client: httpx chat-completions client

# 🔄 Connected Modules / Calls From:
# Used by: Community search augmenter, service container

from .llm_client import ChatCompletionClient, parse_json_answer, strip_code_fences

__all__ = ["ChatCompletionClient", "parse_json_answer", "strip_code_fences"]
