# routers/pages.py
"""
Public content pages. No authentication.
"""
from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from database import get_session
from models import Community, CommunityMember, Project, ProjectStatus

router = APIRouter(prefix="/api", tags=["pages"])

MISSION = (
     "Ray Unity's mission is to accelerate the transition to clean, renewable solar energy "
     "by making it more accessible and affordable through community collaboration."
)

CORE_VALUES = [
     {
          "title": "Community First",
          "description": "We believe in the power of communities coming together to achieve "
                         "what individuals cannot do alone.",
     },
     {
          "title": "Transparency",
          "description": "We provide clear, honest information about costs, benefits, and processes "
                         "so communities can make informed decisions.",
     },
     {
          "title": "Sustainability",
          "description": "We're committed to environmental stewardship and helping create a cleaner, "
                         "more sustainable future.",
     },
]

STEPS = [
     {
          "step": 1,
          "title": "Join or Create a Community",
          "points": [
               "Leverage collective bargaining power for better pricing",
               "Share installation costs and resources",
               "Build connections with neighbors who share sustainability goals",
          ],
     },
     {
          "step": 2,
          "title": "Input Energy Consumption Data",
          "points": [
               "At least six bi-monthly electricity bills",
               "Consumption in kilowatt-hours (kWh) for each billing period",
               "The bill amount for each period",
          ],
     },
     {
          "step": 3,
          "title": "Receive and Review Solar Quotes",
          "points": [
               "Total system size and specifications",
               "Equipment and installation costs",
               "Projected energy production",
               "Warranty information and installation timeframe",
          ],
     },
     {
          "step": 4,
          "title": "Vote on Your Preferred Provider",
          "points": [
               "Every member has one vote and can change it until voting ends",
               "Live vote percentages show the leading quote",
               "The community admin ends voting and confirms the provider",
          ],
     },
     {
          "step": 5,
          "title": "Installation and Monitoring",
          "points": [
               "Track the project from planning to completion",
               "Environmental impact metrics",
               "Financial savings analysis",
          ],
     },
]

FAQ = [
     {
          "question": "How much money can I save?",
          "answer": "Savings vary based on your current energy costs, consumption patterns, and local "
                    "solar conditions. On average, Ray Unity communities report 15-30% reductions in "
                    "their electricity costs over time.",
     },
     {
          "question": "What if I move or sell my home?",
          "answer": "Solar installations typically increase property value. If you move, the solar "
                    "system remains with the property, becoming a selling point for future buyers.",
     },
     {
          "question": "Do I need to maintain the solar panels?",
          "answer": "Solar systems require minimal maintenance. Most providers include maintenance "
                    "packages as part of their installation quote.",
     },
     {
          "question": "What if my roof isn't suitable for solar?",
          "answer": "Not all homes in a community need to have solar panels installed on their roofs. "
                    "Shared systems distribute the benefits based on investment, regardless of where "
                    "the panels are physically installed.",
     },
]


@router.get("/about", summary="About Ray Unity")
def about(db: Session = Depends(get_session)):
     """Mission, values and live platform figures."""
     communities = db.query(func.count(Community.id)).scalar() or 0
     households = db.query(func.count(func.distinct(CommunityMember.user_id))).scalar() or 0
     completed = (
          db.query(func.count(Project.id))
          .filter(Project.status == ProjectStatus.COMPLETED)
          .scalar()
     ) or 0
     return {
          "title": "About Ray Unity",
          "mission": MISSION,
          "core_values": CORE_VALUES,
          "stats": {
               "communities": communities,
               "households": households,
               "completed_installations": completed,
          },
     }


@router.get("/how-it-works", summary="How Ray Unity works")
def how_it_works():
     return {
          "title": "How Ray Unity Works",
          "steps": STEPS,
          "faq": FAQ,
     }
