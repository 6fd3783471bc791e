# 📄 File: plantpal/api/v1/router.py
# 🧭 Purpose (Layman Explanation):
# The traffic director: sends sign-in requests to the account code, plant
# requests to the plant code, and so on.
# 🧪 Purpose (Technical Summary):
# Aggregates every module router under its v1 prefix; mounted at /api by the
# application factory.
# 🔗 Dependencies:
# FastAPI, module presentation routers
# 🔄 Connected Modules / Calls From:
# plantpal.main

import logging

from fastapi import APIRouter

from plantpal.modules.community.presentation.api.v1.community import community_router
from plantpal.modules.diagnosis.presentation.api.v1.diagnosis import diagnosis_router
from plantpal.modules.plant_management.presentation.api.v1.plants import plants_router
from plantpal.modules.user_management.presentation.api.v1.auth import auth_router

from . import ROUTE_PREFIXES

logger = logging.getLogger(__name__)

api_v1_router = APIRouter()

api_v1_router.include_router(auth_router, prefix=ROUTE_PREFIXES["auth"], tags=["Authentication"])
api_v1_router.include_router(plants_router, prefix=ROUTE_PREFIXES["plants"], tags=["Plants"])
api_v1_router.include_router(diagnosis_router, prefix=ROUTE_PREFIXES["diagnosis"], tags=["Diagnosis"])
api_v1_router.include_router(community_router, prefix=ROUTE_PREFIXES["community"], tags=["Community"])
