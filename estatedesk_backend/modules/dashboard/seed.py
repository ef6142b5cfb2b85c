"""Sample data for trying out a fresh account."""

from decimal import Decimal

SAMPLE_PROPERTIES = [
    {
        "name": "Sunset Villa",
        "address": "123 Sunset Blvd, Los Angeles, CA 90210",
        "type": "villa",
        "bedrooms": 3,
        "bathrooms": Decimal("2.5"),
        "square_feet": 2500,
        "rent_amount": Decimal("3500"),
        "currency": "USD",
        "status": "occupied",
    },
    {
        "name": "Downtown Apartment",
        "address": "456 Main St, New York, NY 10001",
        "type": "apartment",
        "bedrooms": 2,
        "bathrooms": Decimal("1"),
        "square_feet": 1200,
        "rent_amount": Decimal("2800"),
        "currency": "USD",
        "status": "vacant",
    },
    {
        "name": "Garden House",
        "address": "789 Oak Ave, Chicago, IL 60601",
        "type": "house",
        "bedrooms": 4,
        "bathrooms": Decimal("3"),
        "square_feet": 3200,
        "rent_amount": Decimal("4200"),
        "currency": "USD",
        "status": "vacant",
    },
    {
        "name": "Beach Condo",
        "address": "321 Ocean Dr, Miami, FL 33139",
        "type": "condo",
        "bedrooms": 2,
        "bathrooms": Decimal("2"),
        "square_feet": 1500,
        "rent_amount": Decimal("3200"),
        "currency": "USD",
        "status": "occupied",
    },
]
