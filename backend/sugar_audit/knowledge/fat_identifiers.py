"""Fat and oil ingredient terms."""

FAT_IDENTIFIERS = (
    "palm oil",
    "palmolein",
    "hydrogenated fat",
    "hydrogenated oil",
    "partially hydrogenated",
    "butter oil",
    "butter",
    "refined vegetable oil",
    "vegetable oil",
    "sunflower oil",
    "rapeseed oil",
    "canola oil",
    "soybean oil",
    "cottonseed oil",
    "coconut oil",
    "ghee",
    "lard",
    "tallow",
    "shortening",
    "cocoa butter",
    "shea butter",
    "margarine",
    "vegetable fat",
    "palm fat",
    "interesterified",
    "trans fat",
    "trans fatty acids",
)
