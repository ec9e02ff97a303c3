from loguru import logger
from sqlmodel import Session, select
from app.db.core import engine, create_db_and_tables
from app.db.schema import Product
from app.models.eco_score import EnvironmentalProfile
from app.services.product import apply_eco_score


# Demo catalogue. Attribute values are written the way the admin form
# used to submit them (free text), so they go through the same parsing.
DEMO_PRODUCTS = [
    {
        "name": "Bamboo Toothbrush",
        "category": "Personal Care",
        "ingredients": ["bamboo", "nylon-4"],
        "environmental": {
            "carbonFootprint": "2.1 kg",
            "waterConsumption": "40 L",
            "energyUsage": "0.8 kWh",
            "wastePollution": "Low",
            "chemicalUsage": "Minimal",
            "recyclability": "High",
            "environmentalImpact": "Low",
            "sustainabilityLevel": "High",
        },
    },
    {
        "name": "Plastic Toothbrush",
        "category": "Personal Care",
        "ingredients": ["polypropylene", "nylon-6"],
        "environmental": {
            "carbonFootprint": "75",
            "waterConsumption": "900",
            "energyUsage": "12",
            "wastePollution": "High",
            "chemicalUsage": "Moderate",
            "recyclability": "Low",
            "environmentalImpact": "Medium",
            "sustainabilityLevel": "Low",
        },
    },
    {
        "name": "Aluminium Water Bottle",
        "category": "Kitchen",
        "ingredients": ["aluminium", "silicone"],
        "environmental": {
            "carbonFootprint": 120,
            "waterConsumption": 1800,
            "energyUsage": 25,
            "recyclability": "high recyclability",
            "environmentalImpact": "moderate",
        },
    },
    {
        "name": "Fast Fashion Denim Jeans",
        "category": "Apparel",
        "ingredients": ["cotton", "elastane", "indigo dye"],
        "environmental": {
            "carbonFootprint": 330,
            "waterConsumption": 7500,
            "energyUsage": 60,
            "wastePollution": "high",
            "chemicalUsage": "severe",
            "recyclability": "medium",
            "environmentalImpact": "high",
            "sustainabilityLevel": "low",
        },
    },
    {
        "name": "Organic Cotton T-Shirt",
        "category": "Apparel",
        "ingredients": ["organic cotton"],
        "environmental": {
            "carbonFootprint": 48,
            "waterConsumption": 1200,
            "energyUsage": 6,
            "chemicalUsage": "minimal",
            "recyclability": "medium",
        },
    },
]


def seed_products(session: Session):
    """Creates the demo products that don't exist yet (matched by name)."""
    logger.info("--- Seeding Products ---")

    for item in DEMO_PRODUCTS:
        existing = session.exec(
            select(Product).where(Product.name == item["name"])).first()
        if existing:
            logger.info(f"Existing Product: {item['name']}")
            continue

        profile = EnvironmentalProfile.model_validate(item["environmental"])
        product = Product(
            name=item["name"],
            category=item["category"],
            ingredients=item["ingredients"],
            uploaded_by="seed",
            **profile.model_dump(),
        )
        apply_eco_score(product)
        session.add(product)
        logger.info(
            f"Created Product: {product.name} -> {product.eco_score} ({product.eco_letter})")


def main():
    create_db_and_tables()

    with Session(engine) as session:
        try:
            seed_products(session)

            session.commit()
            logger.info("Database seeding completed successfully.")

        except Exception as e:
            session.rollback()
            logger.error(f"Seeding failed: {e}")
            raise e


if __name__ == "__main__":
    main()
