#!/usr/bin/env python3
"""
Initialize database with tables and demo data

Creates the demo account (DEMO_USER_EMAIL / DEMO_USER_PASSWORD), replaces its
waitlists with ten sample pages and fills each one with subscribers.
"""
import random
import sys
import os
from datetime import timedelta

# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from app.core.config import settings
from app.core.database import Base, SessionLocal, engine
from app.core.security import get_password_hash
from app.models import Subscriber, User, Waitlist
from app.models.user import utcnow

FIRST_NAMES = [
    'Alexandre', 'Sophie', 'Thomas', 'Marie', 'Julien', 'Camille', 'Nicolas', 'Julie', 'Antoine', 'Laura',
    'Maxime', 'Claire', 'Pierre', 'Émilie', 'David', 'Sarah', 'Romain', 'Pauline', 'Vincent', 'Marion',
    'Emma', 'Lucas', 'Léa', 'Hugo', 'Chloé', 'Louis', 'Manon', 'Nathan', 'Inès', 'Noah',
]
LAST_NAMES = [
    'Martin', 'Bernard', 'Dubois', 'Thomas', 'Robert', 'Richard', 'Petit', 'Durand', 'Leroy', 'Moreau',
    'Simon', 'Laurent', 'Lefebvre', 'Michel', 'Garcia', 'David', 'Bertrand', 'Roux', 'Vincent', 'Fournier',
    'Girard', 'Bonnet', 'Dupont', 'Lambert', 'Fontaine', 'Rousseau', 'Blanc', 'Garnier', 'Lemoine', 'Fabre',
]
COMPANIES = [
    'TechCorp', 'InnovateLab', 'DigitalAgency', 'CloudTech', 'DataSolutions', 'FutureWorks', 'SmartBiz',
    'TechVenture', 'InnovationHub', 'DigitalFirst', 'CloudFirst', 'TechStart', 'FutureTech',
    'SmartSolutions', 'StartupXYZ', 'NextGen', 'InnovateNow', 'TechFlow', 'DataDriven', 'CloudScale',
]

# slug, title, description, theme, primary, background, logo, collect company, countdown days
DEMO_WAITLISTS = [
    ('salesforce-next', 'SalesForce Next',
     "CRM nouvelle génération avec IA intégrée. Gérez vos ventes, automatisez vos processus et boostez votre chiffre d'affaires.",
     'dark-modern', '#3B82F6', '#111827', '1', True, 30),
    ('designflow', 'DesignFlow',
     'Plateforme collaborative de design UI/UX. Créez, prototypagez et collaborez avec votre équipe en temps réel.',
     'light-minimal', '#000000', '#FFFFFF', None, True, None),
    ('taskmaster-pro', 'TaskMaster Pro',
     'Gestion de projet intelligente avec automatisation des workflows. Organisez vos équipes et livrez vos projets à temps.',
     'light-gray', '#6366F1', '#F5F5F5', '2', True, 45),
    ('financely', 'Financely',
     'Comptabilité automatisée pour les PME. Générez vos factures, suivez vos dépenses et préparez vos déclarations en quelques clics.',
     'light-minimal', '#000000', '#FFFFFF', '3', True, None),
    ('marketo-ai', 'Marketo AI',
     "Marketing automation alimenté par l'IA. Personnalisez vos campagnes, optimisez vos conversions et multipliez vos revenus.",
     'vibrant-purple', '#A855F7', '#0F0F1E', None, True, 21),
    ('meetflow', 'MeetFlow',
     'Visioconférence haute qualité avec transcription automatique et notes intelligentes. Réunissez-vous comme jamais.',
     'dark-modern', '#3B82F6', '#111827', '4', False, None),
    ('learnwise', 'LearnWise',
     "Plateforme d'e-learning avec parcours personnalisés. Créez des formations engageantes et suivez la progression de vos apprenants.",
     'light-gray', '#6366F1', '#F5F5F5', '5', True, 60),
    ('inventory-smart', 'Inventory Smart',
     "Gestion d'inventaire intelligente avec prévisions de stock. Optimisez vos stocks, réduisez vos coûts et évitez les ruptures.",
     'light-minimal', '#000000', '#FFFFFF', None, True, None),
    ('analytics-pro', 'Analytics Pro',
     'Analytics avancées avec tableaux de bord personnalisables. Visualisez vos données, découvrez des insights et prenez de meilleures décisions.',
     'vibrant-purple', '#A855F7', '#0F0F1E', '6', True, 14),
    ('collab-space', 'CollabSpace',
     'Espace de collaboration tout-en-un. Chat, documents, calendrier et tâches dans une seule plateforme intuitive.',
     'dark-modern', '#3B82F6', '#111827', '7', False, None),
]

SUBSCRIBER_COUNTS = [23, 15, 31, 18, 27, 12, 35, 19, 29, 16]


def get_or_create_demo_user(session) -> User:
    email = settings.DEMO_USER_EMAIL.lower()
    user = session.query(User).filter(User.email == email).first()
    if user:
        print(f"✅ Demo user already exists: {email}")
        return user
    user = User(
        email=email,
        password_hash=get_password_hash(settings.DEMO_USER_PASSWORD),
        name="Demo User",
        is_active=True,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    print(f"✅ Demo user created: {email}")
    return user


def make_subscribers(waitlist: Waitlist, count: int, waitlist_index: int):
    """Positions run 1..count in insertion order, emails stay unique per waitlist."""
    subscribers = []
    for i in range(count):
        first_name = random.choice(FIRST_NAMES)
        last_name = random.choice(LAST_NAMES)
        unique_id = waitlist_index * 1000 + i
        subscribers.append(Subscriber(
            waitlist_id=waitlist.id,
            email=f"{first_name.lower()}.{last_name.lower()}.{unique_id}@example.com",
            name=f"{random.choice(FIRST_NAMES)} {random.choice(LAST_NAMES)}",
            company=random.choice(COMPANIES) if waitlist.collect_company else None,
            position=i + 1,
        ))
    return subscribers


def init_database():
    """Initialize database with tables and demo data"""
    print("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    print("Tables created successfully!")

    session = SessionLocal()
    try:
        user = get_or_create_demo_user(session)

        # Start from a clean slate for the demo account only
        for existing in session.query(Waitlist).filter(Waitlist.user_id == user.id).all():
            session.delete(existing)
        session.commit()

        created = []
        for index, (slug, title, description, theme, primary, background, logo, company, days) in enumerate(DEMO_WAITLISTS):
            waitlist = Waitlist(
                user_id=user.id,
                slug=slug,
                title=title,
                description=description,
                headline=title,
                subheadline=None,
                theme=theme,
                primary_color=primary,
                background_color=background,
                logo_url=logo,
                collect_name=True,
                collect_company=company,
                countdown_enabled=days is not None,
                countdown_date=utcnow() + timedelta(days=days) if days is not None else None,
            )
            session.add(waitlist)
            session.flush()
            session.add_all(make_subscribers(waitlist, SUBSCRIBER_COUNTS[index], index))
            created.append(waitlist)
            print(f"✅ Waitlist created: {title} ({slug}) with {SUBSCRIBER_COUNTS[index]} subscribers")

        session.commit()

        print("\n🎉 Demo data ready!")
        print(f"   Email: {settings.DEMO_USER_EMAIL}")
        print(f"   Password: {settings.DEMO_USER_PASSWORD}")
        for waitlist in created:
            print(f"   - {waitlist.title}: {settings.FRONTEND_URL.rstrip('/')}/w/{waitlist.slug}")

    except Exception as e:
        print(f"❌ Error initializing database: {e}")
        session.rollback()
        raise
    finally:
        session.close()


if __name__ == "__main__":
    init_database()
