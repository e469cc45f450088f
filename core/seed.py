"""
Demo catalog loaded into an empty store at startup.
"""

from schemas.catalog_schemas import CategoryCreate, ProductCreate
from schemas.user_schemas import UserInsert
from storage import Storage
from utils.hashing import hash_password
from utils.logger import get_logger

logger = get_logger(__name__)

UNSPLASH = "https://images.unsplash.com/{}?ixlib=rb-4.0.3&auto=format&fit=crop&w=800&h={}"

DEMO_CATEGORIES = [
    ("THAIBAH ENTERPRISES", "thaibah-enterprises", "Crockery, Hajj-Umrah Kit, Dubai Abayas",
     UNSPLASH.format("photo-1543353071-10c8ba85a904", 500)),
    ("MINHA ZAINAB ENTERPRISES", "minha-zainab-enterprises", "Home Utilities",
     UNSPLASH.format("photo-1590794056486-75e67dada8af", 500)),
    ("HAYA BOUTIQUE", "haya-boutique", "Bhurqa, Hijab, Slippers",
     UNSPLASH.format("photo-1534349762230-e0cadf78f5da", 500)),
    ("AYISHA SILK HOUSE", "ayisha-silk-house", "Clothing, Fashion Outlet, Boutique, Apparel",
     UNSPLASH.format("photo-1551232864-3f0890e580d9", 500)),
    ("TODLERRY", "todlerry", "Kids Fashion, Accessories, Baby Care",
     UNSPLASH.format("photo-1596870230751-ebdfce98ec42", 500)),
    ("CRESCENT FASHION", "crescent-fashion", "Home Decor, Cosmetics, Imported Laces, Clothing",
     UNSPLASH.format("photo-1616046229478-9901c5536a45", 500)),
    ("AL-AIMAN CREATION", "al-aiman-creation", "Packing Materials, Traditional Food",
     UNSPLASH.format("photo-1589533610925-1cffc309ebaa", 900)),
    ("GIRL'S & BOY'S", "girls-and-boys", "Boutique for Girls' and Boys' Apparel",
     UNSPLASH.format("photo-1622290291468-a28f7a7dc6a8", 900)),
    ("General Shop", "general-shop", "All combined category products",
     UNSPLASH.format("photo-1613395079985-21fb32cf24c5", 900)),
]

# (name, slug, description, price, sale price, photo, featured, new arrival,
#  rating, reviews, stock, category slug)
DEMO_PRODUCTS = [
    ("Classic Dubai Abaya", "classic-dubai-abaya",
     "Elegant and comfortable black abaya with beautiful embroidery details",
     119.99, 89.99, "photo-1639475377520-b256a5d204b1", True, False, 4.5, 24, 50, "thaibah-enterprises"),
    ("Luxury Tea Set", "luxury-tea-set",
     "Exquisite traditional tea set with gold accents, perfect for entertaining guests",
     49.99, None, "photo-1526406915894-7bcd65f60845", True, False, 4.0, 18, 30, "minha-zainab-enterprises"),
    ("Premium Silk Hijab", "premium-silk-hijab",
     "Luxuriously soft silk hijab in a range of beautiful colors",
     32.99, None, "photo-1534349762230-e0cadf78f5da", True, True, 5.0, 36, 100, "haya-boutique"),
    ("Kids Festive Outfit", "kids-festive-outfit",
     "Beautiful traditional outfit for kids, perfect for Eid and other celebrations",
     45.99, None, "photo-1622290291468-a28f7a7dc6a8", True, False, 4.0, 12, 25, "todlerry"),
    ("Islamic Wall Art", "islamic-wall-art",
     "Elegant Islamic calligraphy wall art, perfect for adding a spiritual touch to your home",
     65.99, None, "photo-1613395079985-21fb32cf24c5", False, True, 4.5, 8, 15, "crescent-fashion"),
    ("Traditional Sweets Box", "traditional-sweets-box",
     "Assortment of traditional sweets in elegant gift packaging",
     29.99, None, "photo-1589533610925-1cffc309ebaa", False, True, 4.0, 5, 50, "al-aiman-creation"),
]

ADMIN_USER = {
    "username": "admin",
    "email": "admin@kubramart.com",
    "password": "password123",
    "first_name": "Admin",
    "last_name": "User",
}


def seed_demo_data(storage: Storage) -> bool:
    """
    Load the demo catalog and the admin user.

    Does nothing when the store already has categories, so it is safe to
    call on every startup. Returns True when data was inserted.
    """
    if storage.get_categories():
        logger.debug("Catalog already populated, skipping seed")
        return False

    with storage.transaction():
        category_ids = {}
        for name, slug, description, image in DEMO_CATEGORIES:
            category = storage.create_category(
                CategoryCreate(name=name, slug=slug, description=description, image=image)
            )
            category_ids[slug] = category.id

        for (name, slug, description, price, sale_price, photo, featured, new_arrival,
             rating, num_reviews, stock, category_slug) in DEMO_PRODUCTS:
            image = UNSPLASH.format(photo, 900)
            storage.create_product(ProductCreate(
                name=name, slug=slug, description=description,
                price=price, sale_price=sale_price,
                image=image, images=[image],
                featured=featured, new_arrival=new_arrival,
                rating=rating, num_reviews=num_reviews, stock=stock,
                category_id=category_ids[category_slug],
            ))

        if storage.get_user_by_username(ADMIN_USER["username"]) is None:
            storage.create_user(UserInsert(
                hashed_password=hash_password(ADMIN_USER["password"]),
                **{k: v for k, v in ADMIN_USER.items() if k != "password"},
            ))

    logger.info(
        "Demo data seeded",
        extra={"categories": len(DEMO_CATEGORIES), "products": len(DEMO_PRODUCTS)}
    )
    return True
