"""Seed catalog used by the in-memory product repository."""

from datetime import UTC, datetime

from shared.catalog.models import Product


def _day(month: int, day: int) -> datetime:
    return datetime(2024, month, day, tzinfo=UTC)


def _image(photo_id: int) -> str:
    return f"https://images.pexels.com/photos/{photo_id}/pexels-photo-{photo_id}.jpeg?w=500&h=500&fit=crop"


SEED_PRODUCTS: tuple[Product, ...] = (
    Product(
        id="1",
        name="Black Opium",
        description=(
            "A luxurious fragrance by Yves Saint Laurent with intoxicating notes of coffee, vanilla, "
            "and orange blossom. Perfect for confident women who want to make a statement."
        ),
        price=129.99,
        discounted_price=99.99,
        image=_image(28471438),
        brand="Yves Saint Laurent",
        fragrance="Oriental",
        size="90ml",
        quantity=50,
        rating=4.8,
        reviews=245,
        category="women",
        created_at=_day(1, 1),
        updated_at=_day(1, 15),
    ),
    Product(
        id="2",
        name="Sauvage",
        description=(
            "A timeless masculine fragrance by Christian Dior featuring spicy ambroxan and fresh citrus "
            "notes. The ultimate sophisticated choice for the modern man."
        ),
        price=119.99,
        image=_image(14402573),
        brand="Christian Dior",
        fragrance="Aromatic Spicy",
        size="100ml",
        quantity=45,
        rating=4.9,
        reviews=189,
        category="men",
        created_at=_day(1, 5),
        updated_at=_day(1, 20),
    ),
    Product(
        id="3",
        name="Boss Bottled",
        description=(
            "An iconic fragrance by Hugo Boss blending warm amber with aromatic notes and a hint of "
            "spice. A classic choice for the discerning gentleman."
        ),
        price=95.99,
        image=_image(20753035),
        brand="Hugo Boss",
        fragrance="Woody Amber",
        size="100ml",
        quantity=30,
        rating=4.7,
        reviews=312,
        category="men",
        created_at=_day(1, 10),
        updated_at=_day(1, 18),
    ),
    Product(
        id="4",
        name="Coco Noir",
        description=(
            "An elegant oriental fragrance by Chanel with black amber, patchouli, and vanilla. "
            "A mysterious and sensual choice for sophisticated women."
        ),
        price=135.99,
        discounted_price=109.99,
        image=_image(21067590),
        brand="Chanel",
        fragrance="Oriental",
        size="100ml",
        quantity=60,
        rating=4.8,
        reviews=156,
        category="women",
        created_at=_day(1, 12),
        updated_at=_day(1, 19),
    ),
    Product(
        id="5",
        name="Bleu de Chanel",
        description=(
            "A refined aromatic fragrance by Chanel featuring ambroxan, sandalwood, and citrus notes. "
            "Timeless elegance for the modern man who appreciates luxury."
        ),
        price=129.99,
        image=_image(9202894),
        brand="Chanel",
        fragrance="Aromatic",
        size="100ml",
        quantity=40,
        rating=4.9,
        reviews=201,
        category="men",
        created_at=_day(1, 8),
        updated_at=_day(1, 17),
    ),
    Product(
        id="6",
        name="La Vie Est Belle",
        description=(
            "A sweet and luminous fragrance by Lancôme with notes of patchouli, praline, and iris. "
            "Celebrating the beauty of life with every spray."
        ),
        price=119.99,
        image=_image(1827234),
        brand="Lancôme",
        fragrance="Oriental Floral",
        size="75ml",
        quantity=55,
        rating=4.6,
        reviews=128,
        category="women",
        created_at=_day(1, 3),
        updated_at=_day(1, 21),
    ),
)
