"""Built-in dataset used on first run or when the stored snapshot is unreadable."""
from tailorshop.models import AppState, GarmentTypeDefinition, ShopInfo

DEFAULT_GARMENT_TYPES = [
    ('Shirt', ('Length', 'Chest', 'Waist', 'Shoulder', 'Sleeve', 'Collar')),
    ('Pant', ('Length', 'Waist', 'Hip', 'Thigh', 'Knee', 'Bottom')),
    ('Kurta', ('Length', 'Chest', 'Waist', 'Shoulder', 'Sleeve', 'Collar')),
    ('Pyjama', ('Length', 'Waist', 'Hip', 'Bottom')),
    ('Blouse', ('Length', 'Chest', 'Waist', 'Shoulder', 'Sleeve')),
    ('Suit', ('Length', 'Chest', 'Waist', 'Hip', 'Shoulder', 'Sleeve')),
]


def default_shop_info(config) -> ShopInfo:
    return ShopInfo(
        name=config.get('DEFAULT_SHOP_NAME', 'Deepak Tailor'),
        tagline=config.get('DEFAULT_SHOP_TAGLINE', ''),
        address=config.get('DEFAULT_SHOP_ADDRESS', ''),
        phone=config.get('DEFAULT_SHOP_PHONE', ''),
    )


def default_state(config) -> AppState:
    """Empty shop with the standard garment catalogue."""
    return AppState(
        garment_types=tuple(
            GarmentTypeDefinition(name=name, measurement_fields=fields)
            for name, fields in DEFAULT_GARMENT_TYPES
        ),
        shop_info=default_shop_info(config),
    )
