"""
Initial project catalogue and the helper that loads it into an empty database.
"""

from __future__ import annotations

import logging

from portfolio_api.db import DbClient

logger = logging.getLogger(__name__)


def _github(url: str) -> dict:
    return {"url": url, "icon": "Github", "text": "GitHub"}


INITIAL_PROJECTS: list[dict] = [
    {
        "title": "Vibelink – Where Vibes Connect",
        "description": (
            "A playful social media app designed to connect users through photos, "
            "thoughts, DMs, and private journaling, blending lighthearted features "
            "with encryption and real-time updates."
        ),
        "tech": ["React Native", "Expo", "Socket.io", "Express.js"],
        "features": [
            "Photo & thought sharing with humor-forward UX",
            "Real-time DMs via Socket.io",
            "Private encrypted journaling for self-reflection",
            "Custom themes (Cyberpunk, Midnight Blue, Obsidian Black... and more)",
        ],
        "links": [
            _github("https://github.com/kichu12348/vibelink"),
            {"url": "https://vibelink.kichu.space", "icon": "Info", "text": "Learn More"},
        ],
    },
    {
        "title": "SnapBook – Collaborative Digital Scrapbooking",
        "description": (
            "A real-time collaborative scrapbook app for building digital memory "
            "boards with drag, pinch, rotate, and animate capabilities while "
            "editing live with friends."
        ),
        "tech": ["React Native", "Expo", "Reanimated", "Socket.io", "Express.js"],
        "features": [
            "Create scrapbooks with themed covers and custom quotes",
            "Freeform layout with animated, resizable elements",
            "Real-time collab with live editing via Socket.io",
            "Dreamy dark mode aesthetic with soft overlays",
        ],
        "links": [
            _github("https://github.com/kichu12348/snapbook"),
            {"url": "https://snapbook.kichu.space", "icon": "Info", "text": "Learn More"},
        ],
    },
    {
        "title": "UTSAV 2K25 – Interactive Arts Festival",
        "description": (
            "A cinematic web experience built around a fictional arts festival set "
            "on Arrakis, mixing storytelling, immersive visuals, and real-time "
            "interactivity."
        ),
        "tech": ["React", "GSAP", "CSS Modules", "Next.js"],
        "features": [
            "Animated 3D pyramid hero scene with particle effects",
            "Interactive house selection with gamified visuals",
            "Flip-card event showcase with scroll-triggered animation",
            "Live scoreboard system with dynamic counters",
        ],
        "links": [
            _github("https://github.com/kichu12348/dune_base"),
            {"url": "https://utsav-2k25.vercel.app", "icon": "Globe", "text": "Live Demo"},
        ],
    },
    {
        "title": "Neru – A Simple Neural Network Implementation",
        "description": (
            "An educational TypeScript library for feed-forward neural networks "
            "with backpropagation learning."
        ),
        "tech": ["TypeScript"],
        "features": [
            "Feed-forward propagation",
            "Simplified backpropagation learning",
            "Configurable network architecture",
            "Sigmoid activation function",
        ],
        "links": [_github("https://github.com/kichu12348/neru")],
    },
    {
        "title": "Pineabble",
        "description": (
            "A collection of quirky and pointless web experiences designed to cure "
            "boredom, from infinite scrolling and cat philosophy to progress bars "
            "that never quite reach 100%."
        ),
        "tech": ["React", "JavaScript", "HTML", "CSS Modules", "Vite"],
        "features": [
            "Infinite scrolling content with whimsical quotes",
            "Philosophical Cat page with AI-generated insights",
            "Pointless Progress Bars with zero closure",
            "History of Invisible Things and Fortune Teller Potato",
        ],
        "links": [
            _github("https://github.com/username/bananas"),
            {"url": "https://baananaa.vercel.app", "icon": "Globe", "text": "Live Demo"},
        ],
        "collaborators": [
            {
                "name": "Neil Oommen Renni",
                "uri": [
                    {
                        "type": "LinkedIn",
                        "uri": "https://www.linkedin.com/in/neil-oommen-renni-aa1694291",
                        "icon": "Linkedin",
                    },
                    {"type": "GitHub", "uri": "https://github.com/neilor-21", "icon": "Github"},
                ],
            },
            {
                "name": "Malavika G K",
                "uri": [
                    {
                        "type": "LinkedIn",
                        "uri": "https://www.linkedin.com/in/malavika-g-k-405089351",
                        "icon": "Linkedin",
                    },
                    {"type": "GitHub", "uri": "https://github.com/MalavikaGK", "icon": "Github"},
                ],
            },
        ],
    },
]


def seed_projects(db: DbClient, projects: list[dict] | None = None) -> bool:
    """
    Load the catalogue into an empty projects table.

    Returns False without writing anything when projects already exist.
    """
    projects = INITIAL_PROJECTS if projects is None else projects
    db.init_schema()
    count = db.count_projects()
    if count > 0:
        logger.info("Database already contains %d projects. No seeding needed.", count)
        return False

    logger.info("Database is empty, seeding with %d projects", len(projects))
    db.insert_projects(projects)
    logger.info("Seeded %d projects", len(projects))
    return True
