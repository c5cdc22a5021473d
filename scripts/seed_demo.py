#!/usr/bin/env python3
"""
Seed script to create a demo building, restaurant and users
"""

import asyncio


async def seed_demo_data():
    """Seed demo data for development"""
    from sqlalchemy import select

    from lunch.database import SessionLocal, init_db
    from lunch.models.restaurant import Restaurant, Building, RestaurantBuilding
    from lunch.models.user import User

    # Create tables
    await init_db()

    async with SessionLocal() as db:
        # Check if the demo building already exists
        result = await db.execute(
            select(Building).where(Building.name == "Coworking")
        )
        existing = result.scalar_one_or_none()

        if existing:
            print("Demo data already exists. Skipping...")
            return

        print("Creating demo building and restaurant...")

        building = Building(name="Coworking", address="1 Default Street")
        db.add(building)

        restaurant = Restaurant(name="Trattoria", chat_id=100000001)  # Replace with the real chat id
        db.add(restaurant)
        await db.flush()

        db.add(RestaurantBuilding(restaurant_id=restaurant.id, building_id=building.id))

        users = [
            User(telegram_user_id=200000001, username="alice", first_name="Alice", building_id=building.id),
            User(telegram_user_id=200000002, username="bob", first_name="Bob", building_id=building.id),
        ]
        db.add_all(users)

        await db.commit()

        print(f"""
Demo data created successfully!

Building: {building.name} (ID: {building.id})
Restaurant: {restaurant.name} (ID: {restaurant.id}, chat {restaurant.chat_id})
Users: {", ".join(u.username for u in users)}

Update the restaurant chat id to the Telegram chat that should
receive group orders.
""")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
