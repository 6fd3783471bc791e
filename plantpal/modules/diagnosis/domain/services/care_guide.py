# 📄 File: plantpal/modules/diagnosis/domain/services/care_guide.py
# 🧭 Purpose (Layman Explanation):
# What to tell a gardener after a diagnosis: practical next steps for each
# disease and general care facts about the plant
# 🧪 Purpose (Technical Summary):
# Static recommendation catalog keyed by disease label plus reference plant info
# 🔗 Dependencies:
# None
# 🔄 Connected Modules / Calls From:
# diagnosis_service.py

from typing import Any, Dict, List

DEFAULT_RECOMMENDATIONS = [
    "Monitor the plant closely for changes.",
    "Consider consulting with a plant expert.",
    "Maintain proper watering and care practices.",
]

RECOMMENDATIONS: Dict[str, List[str]] = {
    "healthy": [
        "Your plant appears to be healthy!",
        "Continue with regular watering and care.",
        "Monitor for any changes in appearance.",
    ],
    "bacterial_spot": [
        "Remove infected leaves and destroy them.",
        "Avoid overhead watering to prevent spread.",
        "Apply copper-based fungicide.",
        "Improve air circulation around plants.",
    ],
    "early_blight": [
        "Remove and destroy infected leaves.",
        "Apply fungicide containing chlorothalonil.",
        "Avoid overhead watering.",
        "Space plants properly for better air circulation.",
    ],
    "late_blight": [
        "Remove all infected plant parts immediately.",
        "Apply fungicide containing copper or chlorothalonil.",
        "Avoid overhead watering.",
        "Improve air circulation and reduce humidity.",
    ],
    "leaf_mold": [
        "Remove infected leaves.",
        "Improve air circulation.",
        "Reduce humidity levels.",
        "Apply fungicide if necessary.",
    ],
    "septoria_leaf_spot": [
        "Remove infected leaves and destroy them.",
        "Apply fungicide containing chlorothalonil.",
        "Avoid overhead watering.",
        "Space plants properly.",
    ],
    "spider_mites": [
        "Spray plants with water to dislodge mites.",
        "Apply insecticidal soap or neem oil.",
        "Introduce predatory mites if available.",
        "Increase humidity to discourage mites.",
    ],
    "target_spot": [
        "Remove infected leaves.",
        "Apply fungicide containing chlorothalonil.",
        "Avoid overhead watering.",
        "Improve air circulation.",
    ],
    "yellow_leaf_curl_virus": [
        "Remove and destroy infected plants.",
        "Control whitefly populations.",
        "Use virus-resistant varieties.",
        "Practice good sanitation.",
    ],
    "mosaic_virus": [
        "Remove and destroy infected plants.",
        "Control aphid populations.",
        "Use virus-resistant varieties.",
        "Disinfect tools between uses.",
    ],
}

TOMATO_PLANT_INFO: Dict[str, Any] = {
    "name": "Tomato Plant",
    "scientificName": "Solanum lycopersicum",
    "family": "Solanaceae",
    "description": "A popular vegetable plant grown for its edible fruits.",
    "careInstructions": {
        "watering": "Water deeply but infrequently, allowing soil to dry between waterings.",
        "sunlight": "Full sun (6-8 hours per day)",
        "soil": "Well-draining, rich soil with pH 6.0-6.8",
        "temperature": "Optimal temperature range: 65-85°F (18-29°C)",
    },
}


def get_recommendations(disease: str) -> List[str]:
    """Care steps for a disease label; unknown labels get the general advice."""
    return list(RECOMMENDATIONS.get(disease, DEFAULT_RECOMMENDATIONS))


def get_plant_info() -> Dict[str, Any]:
    # Only tomato is modelled by the bundled label set
    return {
        **TOMATO_PLANT_INFO,
        "careInstructions": dict(TOMATO_PLANT_INFO["careInstructions"]),
    }
