# games/regions.py
"""
Region codes used on games and their display names.
"""

REGION_MAP = {
    "keelung": "基隆市",
    "new-taipei": "新北市",
    "taipei": "臺北市",
    "taoyuan": "桃園市",
    "hsinchu-city": "新竹市",
    "hsinchu-county": "新竹縣",
    "miaoli": "苗栗縣",
    "taichung": "臺中市",
    "changhua": "彰化縣",
    "nantou": "南投縣",
    "yunlin": "雲林縣",
    "chiayi-city": "嘉義市",
    "chiayi-county": "嘉義縣",
    "tainan": "臺南市",
    "kaohsiung": "高雄市",
    "pingtung": "屏東縣",
    "yilan": "宜蘭縣",
    "hualien": "花蓮縣",
    "taitung": "臺東縣",
    "penghu": "澎湖縣",
    "kinmen": "金門縣",
    "lienchiang": "連江縣",
}

_NAME_TO_CODE = {name: code for code, name in REGION_MAP.items()}


def get_region_name(code):
    """Unknown codes are returned unchanged."""
    return REGION_MAP.get(code, code)


def get_region_code(name):
    return _NAME_TO_CODE.get(name, name)


def get_region_options():
    return [{"value": code, "label": name} for code, name in REGION_MAP.items()]


def is_valid_region_code(code):
    return code in REGION_MAP


def is_valid_region_name(name):
    return name in _NAME_TO_CODE
