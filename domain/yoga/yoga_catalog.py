from typing import List, Optional

from pydantic import BaseModel


class YogaType(BaseModel):
    id: int
    name: str
    title: str
    description: str
    benefits: List[str]
    duration: str
    difficulty: str


YOGA_TYPES: List[YogaType] = [
    YogaType(
        id=1,
        name="Hatha",
        title="Hatha Yoga",
        description="A gentle introduction to the most basic yoga postures. "
                    "Perfect for beginners and those seeking relaxation.",
        benefits=[
            "Improves flexibility and balance",
            "Reduces stress and anxiety",
            "Strengthens core muscles",
            "Enhances body awareness",
        ],
        duration="45-60 minutes",
        difficulty="Beginner",
    ),
    YogaType(
        id=2,
        name="Vinyasa",
        title="Vinyasa Flow",
        description="A dynamic practice linking breath with movement. "
                    "Each movement flows seamlessly into the next.",
        benefits=[
            "Builds cardiovascular endurance",
            "Increases strength and flexibility",
            "Improves focus and concentration",
            "Burns calories effectively",
        ],
        duration="60-75 minutes",
        difficulty="Intermediate",
    ),
    YogaType(
        id=3,
        name="Ashtanga",
        title="Ashtanga Yoga",
        description="A rigorous style following a specific sequence of postures. "
                    "Fast-paced and physically demanding.",
        benefits=[
            "Builds incredible strength",
            "Develops discipline and focus",
            "Detoxifies the body",
            "Enhances stamina and endurance",
        ],
        duration="90 minutes",
        difficulty="Advanced",
    ),
    YogaType(
        id=4,
        name="Iyengar",
        title="Iyengar Yoga",
        description="Focuses on precise alignment and uses props like blocks and straps. "
                    "Great for healing injuries.",
        benefits=[
            "Improves posture and alignment",
            "Therapeutic for injuries",
            "Increases body awareness",
            "Builds strength steadily",
        ],
        duration="60 minutes",
        difficulty="Beginner to Intermediate",
    ),
    YogaType(
        id=5,
        name="Bikram",
        title="Bikram (Hot Yoga)",
        description="A set sequence of 26 poses practiced in a heated room (105°F). "
                    "Intense and detoxifying.",
        benefits=[
            "Deep detoxification through sweat",
            "Increases flexibility rapidly",
            "Strengthens cardiovascular system",
            "Promotes weight loss",
        ],
        duration="90 minutes",
        difficulty="Intermediate to Advanced",
    ),
    YogaType(
        id=6,
        name="Kundalini",
        title="Kundalini Yoga",
        description="Combines movement, breathing techniques, meditation, and chanting. "
                    "Awakens spiritual energy.",
        benefits=[
            "Awakens inner energy",
            "Reduces stress profoundly",
            "Enhances mental clarity",
            "Balances emotions",
        ],
        duration="60-90 minutes",
        difficulty="All Levels",
    ),
    YogaType(
        id=7,
        name="Yin",
        title="Yin Yoga",
        description="A slow-paced style where poses are held for longer periods. "
                    "Targets deep connective tissues.",
        benefits=[
            "Increases flexibility deeply",
            "Promotes relaxation",
            "Improves joint mobility",
            "Calms the nervous system",
        ],
        duration="60-75 minutes",
        difficulty="All Levels",
    ),
    YogaType(
        id=8,
        name="Restorative",
        title="Restorative Yoga",
        description="Uses props to support the body in gentle poses. Deeply relaxing and meditative.",
        benefits=[
            "Deep relaxation and stress relief",
            "Activates parasympathetic nervous system",
            "Aids in recovery from illness",
            "Improves sleep quality",
        ],
        duration="60 minutes",
        difficulty="All Levels",
    ),
    YogaType(
        id=9,
        name="Power Yoga",
        title="Power Yoga",
        description="An athletic, fitness-based approach derived from Ashtanga. "
                    "Builds strength and stamina.",
        benefits=[
            "Builds lean muscle mass",
            "Boosts metabolism",
            "Improves athletic performance",
            "Enhances mental toughness",
        ],
        duration="60 minutes",
        difficulty="Intermediate to Advanced",
    ),
]


def get_yoga_type(yoga_type_id: int) -> Optional[YogaType]:
    return next((item for item in YOGA_TYPES if item.id == yoga_type_id), None)
