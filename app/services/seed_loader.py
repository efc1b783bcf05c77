"""
Seed Data Loader Service.
Creates the default admin and a sample vehicle catalog.
"""

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from app.core.auth import get_password_hash
from app.models.admin import Admin
from app.models.vehicle import Vehicle

logger = logging.getLogger(__name__)


DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin"

SAMPLE_VEHICLES = [
    {
        "type": "Car",
        "brand": "Toyota",
        "model": "Camry",
        "color": "Silver",
        "engine_size": "2.5L",
        "year": 2023,
        "price": Decimal("28500.00"),
        "description": (
            "Experience the perfect blend of reliability and performance with this stunning 2023 "
            "Toyota Camry. This silver beauty features a 2.5L engine that delivers both power and "
            "efficiency. Whether you're commuting to work or embarking on weekend adventures, this "
            "car offers the comfort and dependability you deserve."
        ),
    },
    {
        "type": "SUV",
        "brand": "Honda",
        "model": "CR-V",
        "color": "Blue",
        "engine_size": "1.5L Turbo",
        "year": 2024,
        "price": Decimal("32400.00"),
        "description": (
            "Discover your next adventure with this exceptional 2024 Honda CR-V. This blue SUV is "
            "powered by a 1.5L Turbo engine, offering the perfect balance of performance and fuel "
            "economy. From its eye-catching exterior to its comfortable interior, every detail has "
            "been designed with you in mind."
        ),
    },
    {
        "type": "Bike",
        "brand": "Yamaha",
        "model": "MT-07",
        "color": "Black",
        "engine_size": "689cc",
        "year": 2023,
        "price": Decimal("7699.00"),
        "description": (
            "Step into excitement with this magnificent 2023 Yamaha MT-07. The black finish catches "
            "the eye, while the 689cc engine delivers impressive power when you need it most. This "
            "bike combines modern technology with time-tested reliability, making it perfect for "
            "both daily rides and weekend adventures."
        ),
    },
    {
        "type": "Truck",
        "brand": "Ford",
        "model": "F-150",
        "color": "Red",
        "engine_size": "3.5L V6",
        "year": 2023,
        "price": Decimal("42650.00"),
        "description": (
            "Unleash your potential with this powerful 2023 Ford F-150. This red truck features a "
            "robust 3.5L V6 engine designed for both work and play. With its rugged construction "
            "and advanced features, this F-150 is ready to tackle any challenge you throw at it."
        ),
    },
    {
        "type": "Car",
        "brand": "BMW",
        "model": "3 Series",
        "color": "White",
        "engine_size": "2.0L Turbo",
        "year": 2024,
        "price": Decimal("45200.00"),
        "description": (
            "Experience luxury and performance with this stunning 2024 BMW 3 Series. This white "
            "sedan combines elegant design with a powerful 2.0L Turbo engine. Every drive becomes "
            "an experience with BMW's renowned engineering and premium craftsmanship."
        ),
    },
    {
        "type": "SUV",
        "brand": "Mazda",
        "model": "CX-5",
        "color": "Gray",
        "engine_size": "2.5L",
        "year": 2023,
        "price": Decimal("29200.00"),
        "description": (
            "Discover sophistication with this beautiful 2023 Mazda CX-5. This gray SUV features a "
            "refined 2.5L engine and Mazda's signature design philosophy. Perfect for families who "
            "demand both style and substance in their daily drive."
        ),
    },
    {
        "type": "Van",
        "brand": "Mercedes-Benz",
        "model": "Sprinter",
        "color": "White",
        "engine_size": "2.0L Turbo Diesel",
        "year": 2023,
        "price": Decimal("52500.00"),
        "description": (
            "Experience commercial excellence with this 2023 Mercedes-Benz Sprinter. This white van "
            "features a reliable 2.0L Turbo Diesel engine, perfect for business operations or "
            "large family transportation needs. Built with Mercedes-Benz quality and engineering."
        ),
    },
    {
        "type": "Car",
        "brand": "Tesla",
        "model": "Model 3",
        "color": "Black",
        "engine_size": "Electric",
        "year": 2024,
        "price": Decimal("47240.00"),
        "description": (
            "Step into the future with this cutting-edge 2024 Tesla Model 3. This black electric "
            "vehicle represents the pinnacle of sustainable transportation, offering incredible "
            "performance, advanced autopilot features, and zero emissions driving."
        ),
    },
]


def seed_admin(db: Session) -> Admin:
    """Create the default admin if it does not exist yet"""
    existing_admin = db.query(Admin).filter(Admin.username == DEFAULT_ADMIN_USERNAME).first()
    if existing_admin:
        logger.info("Admin user already exists")
        return existing_admin

    admin = Admin(
        username=DEFAULT_ADMIN_USERNAME,
        password=get_password_hash(DEFAULT_ADMIN_PASSWORD),
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)

    logger.info(f"Default admin user created (username: {DEFAULT_ADMIN_USERNAME}, id: {admin.id})")
    return admin


def seed_vehicles(db: Session) -> int:
    """
    Insert the sample catalog when the vehicles table is empty.

    Returns:
        Number of vehicles inserted
    """
    existing = db.query(Vehicle).count()
    if existing > 0:
        logger.info(f"{existing} vehicles already exist in database")
        return 0

    vehicles = [Vehicle(images=[], **data) for data in SAMPLE_VEHICLES]
    db.add_all(vehicles)
    db.commit()

    prices = [vehicle["price"] for vehicle in SAMPLE_VEHICLES]
    types = sorted({vehicle["type"] for vehicle in SAMPLE_VEHICLES})
    logger.info(
        f"Seeded {len(vehicles)} sample vehicles; types: {', '.join(types)}; "
        f"price range: ${min(prices)} - ${max(prices)}"
    )
    return len(vehicles)


def run_all(db: Session, reset: bool = True) -> dict:
    """
    Seed admin then vehicles, clearing both tables first when `reset` is set.
    """
    if reset:
        logger.info("Clearing existing data")
        db.query(Vehicle).delete()
        db.query(Admin).delete()
        db.commit()

    admin = seed_admin(db)
    vehicles_created = seed_vehicles(db)

    return {
        "admin": admin.username,
        "vehicles_created": vehicles_created,
    }
