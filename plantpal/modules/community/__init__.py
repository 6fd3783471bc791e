# 📄 File: plantpal/modules/community/__init__.py
# 🧭 Purpose (Layman Explanation):
# The gardeners' forum: posts, likes, comments, search and "what is popular".
# 🧪 Purpose (Technical Summary):
# Community bounded context: CommunityPost aggregate, CommunityService with
# best-effort SearchAugmenter calls, memory and SQLAlchemy repositories, and the
# /api/community router.

"""Community module."""
