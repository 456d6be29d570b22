"""
Default site content seeding.
This module contains the starter content for a fresh install and the logic
to save it through the content service.
"""

from typing import Optional

from sqlalchemy.engine import Engine

from services.content_service import ContentService
from utils.database import get_engine

STEAM_BANNER = "https://www.shadowsofsoldiers.com/assets/webp/new-ue5-image.webp"

CONTENT_DATA = {
    "news": [
        {
            "id": "1",
            "title": "Shadows of Soldiers on Unreal Engine 5",
            "date": "August 2024",
            "description": "We are building on Unreal Engine 5 for stunning visuals and realistic gameplay.",
            "content": "Shadows of Soldiers is being developed on Unreal Engine 5.\n\n"
                       "## What This Means for Players\n\n"
                       "- Photorealistic environments\n"
                       "- Large-scale maps with no loading screens\n"
                       "- Dynamic weather and time-of-day systems",
            "image": STEAM_BANNER,
            "tag": "Development",
        },
        {
            "id": "2",
            "title": "Playtest Sign-ups Open",
            "date": "Coming Soon",
            "description": "Sign up for our playtests and help shape the game.",
            "content": "## How to Sign Up\n\n1. Join our Discord community\n2. Fill out the playtest form\n"
                       "3. Wait for your invitation email",
            "image": STEAM_BANNER,
            "tag": "Community",
        },
    ],
    "classes": [
        {
            "id": "1",
            "name": "JUGGERNAUT",
            "role": "Tank",
            "description": "Heavy armor and suppressive firepower.",
            "details": ["Maximum armor protection", "Heavy weapons specialist", "Suppressive fire capabilities"],
            "image": "https://www.shadowsofsoldiers.com/assets/webp/juggernaut.webp",
            "icon": "Crosshair",
            "color": "from-red-500/20 to-transparent",
            "devices": [{"name": "Heavy Armor", "icon": "Shield"}, {"name": "LMG", "icon": "Target"}],
            "specializations": [],
        },
        {
            "id": "2",
            "name": "COMMANDER",
            "role": "Support",
            "description": "Tactical leadership and team support.",
            "details": ["Team coordination", "Tactical strikes", "Battlefield control"],
            "image": "https://www.shadowsofsoldiers.com/assets/webp/commander.webp",
            "icon": "Shield",
            "color": "from-yellow-500/20 to-transparent",
            "devices": [{"name": "Tactical Radio", "icon": "Zap"}, {"name": "Binoculars", "icon": "Eye"}],
            "specializations": [],
        },
        {
            "id": "3",
            "name": "SHADOW",
            "role": "Recon",
            "description": "Speed and stealth. Flank enemies and gather intel.",
            "details": ["Enhanced mobility", "Stealth capabilities", "Intel gathering"],
            "image": "https://www.shadowsofsoldiers.com/assets/webp/shadow.webp",
            "icon": "Eye",
            "color": "from-blue-500/20 to-transparent",
            "devices": [{"name": "Sniper Rifle", "icon": "Crosshair"}, {"name": "Silencer", "icon": "Target"}],
            "specializations": [],
        },
    ],
    "media": [
        {"id": "1", "type": "gif", "title": "Cover System",
         "src": "https://www.shadowsofsoldiers.com/assets/cover.gif", "category": "Gameplay"},
        {"id": "2", "type": "image", "title": "Unreal Engine 5",
         "src": STEAM_BANNER, "category": "Development"},
    ],
    "faq": [
        {"id": "1", "question": "What is Shadows of Soldiers?",
         "answer": "A tactical 5v5 shooter built on Unreal Engine 5 with class-based gameplay."},
        {"id": "2", "question": "What platforms will the game be available on?",
         "answer": "PC via Steam at launch."},
        {"id": "3", "question": "How can I participate in playtests?",
         "answer": "Join our Discord community to be notified about upcoming playtests."},
    ],
    "features": [
        {
            "id": "1",
            "title": "Cover System",
            "description": "Advanced cover mechanics reward tactical positioning and smart movement.",
            "image": "https://www.shadowsofsoldiers.com/assets/cover.gif",
            "icon": "Shield",
            "devices": [
                {"name": "Dynamic Cover", "details": "Interactive cover that can be destroyed or repositioned"},
                {"name": "Peek System", "details": "Lean and peek around corners"},
            ],
        },
    ],
    "privacy": {
        "title": "Privacy Policy",
        "lastUpdated": "August 2024",
        "sections": [
            {"heading": "1. Introduction",
             "content": "We respect your privacy and are committed to protecting your personal data."},
            {"heading": "2. Contact Us",
             "content": "Questions about this policy can be sent through our Discord community."},
        ],
    },
    "terms": {
        "title": "Terms & Conditions",
        "lastUpdated": "August 2024",
        "sections": [
            {"heading": "1. Agreement to Terms",
             "content": "By using the Shadows of Soldiers website you agree to these Terms and Conditions."},
        ],
    },
    "settings": {
        "branding": {
            "siteName": "Shadows of Soldiers",
            "siteTagline": "Tactical 5v5 Shooter",
            "copyrightText": "Shadows of Soldiers. All rights reserved.",
        },
        "seo": {
            "defaultTitle": "Shadows of Soldiers",
            "defaultDescription": "Tactical 5v5 shooter built on Unreal Engine 5.",
            "defaultKeywords": ["tactical shooter", "unreal engine 5", "5v5"],
        },
        "socialLinks": [
            {"platform": "discord", "url": "https://discord.gg/", "enabled": True},
            {"platform": "steam", "url": "https://store.steampowered.com/", "enabled": True},
        ],
        "homepageSections": [
            {"id": "hero", "name": "Hero", "enabled": True},
            {"id": "news", "name": "News", "enabled": True},
            {"id": "features", "name": "Features", "enabled": True},
            {"id": "classes", "name": "Classes", "enabled": True},
            {"id": "cta", "name": "Call to Action", "enabled": True},
        ],
    },
}


def seed_content(force: bool = False, engine: Optional[Engine] = None) -> bool:
    """
    Save the default content.

    Args:
        force: Overwrite existing content
        engine: Engine to use (defaults to the configured one)

    Returns:
        True if content was written
    """
    service = ContentService(engine or get_engine())

    if not force and not service.is_empty():
        print("Content already present, skipping (use --force to overwrite)")
        return False

    tree = service.save_content(CONTENT_DATA)
    print(f"✅ Seeded {len(tree['news'])} news, {len(tree['classes'])} classes, "
          f"{len(tree['faq'])} FAQ entries")
    return True
