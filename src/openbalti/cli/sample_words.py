"""Starter Balti/English pairs used by ``openbalti seed-words``."""

SAMPLE_WORDS: list[tuple[str, str]] = [
    ("ཆུ", "water"),
    ("མེ", "fire"),
    ("ས", "earth"),
    ("རླུང", "air"),
    ("ཉི་མ", "sun"),
    ("ཟླ་བ", "moon"),
    ("སྐར་མ", "star"),
    ("ནམ་མཁའ", "sky"),
    ("རི", "mountain"),
    ("མཚོ", "lake"),
    ("ཤིང", "tree"),
    ("མེ་ཏོག", "flower"),
    ("འབྲས", "fruit"),
    ("ཟས", "food"),
    ("ཆང", "drink"),
    ("ཁྱི", "dog"),
    ("བྱི་ལ", "cat"),
    ("རྟ", "horse"),
    ("བ", "cow"),
    ("ལུག", "sheep"),
    ("བྱ", "bird"),
    ("ཉ", "fish"),
    ("མི", "person"),
    ("བུ", "boy"),
    ("བུ་མོ", "girl"),
    ("ཕ", "father"),
    ("མ", "mother"),
    ("སྤུན", "sibling"),
    ("གྲོགས་པོ", "friend"),
    ("དགྲ", "enemy"),
    ("ཁང་པ", "house"),
    ("སྒོ", "door"),
    ("སྒེའུ་ཁུང", "window"),
    ("ལམ", "road"),
    ("གྲོང་ཁྱེར", "city"),
    ("གྲོང་གསེབ", "village"),
    ("རྒྱལ་ཁབ", "country"),
    ("འཛམ་གླིང", "world"),
    ("ནམ་ལངས", "morning"),
    ("ཉིན་གུང", "noon"),
    ("དགོང་མོ", "evening"),
    ("མཚན་མོ", "night"),
    ("དབྱར་ཁ", "summer"),
    ("སྟོན་ཁ", "autumn"),
    ("དགུན་ཁ", "winter"),
    ("དཔྱིད་ཁ", "spring"),
    ("ལོ", "year"),
    ("ཟླ་བ", "month"),
    ("བདུན་ཕྲག", "week"),
    ("ཉིན་མ", "day"),
]
