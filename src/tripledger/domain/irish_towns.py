"""Irish towns gazetteer used to place statement descriptions and addresses.

Distances are approximate road kilometres from Dublin city centre.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class IrishTown:
    """A town with its county and distance from Dublin."""

    name: str
    county: str
    distance_from_dublin: int


IRISH_TOWNS: tuple[IrishTown, ...] = (
    # Dublin (0 km)
    IrishTown("Dublin", "Dublin", 0),
    IrishTown("Swords", "Dublin", 17),
    IrishTown("Blanchardstown", "Dublin", 12),
    IrishTown("Tallaght", "Dublin", 15),
    IrishTown("Lucan", "Dublin", 13),
    IrishTown("Clondalkin", "Dublin", 12),
    IrishTown("Finglas", "Dublin", 8),
    IrishTown("Malahide", "Dublin", 17),
    IrishTown("Howth", "Dublin", 16),
    IrishTown("Dun Laoghaire", "Dublin", 12),
    IrishTown("Dundrum", "Dublin", 8),
    IrishTown("Balbriggan", "Dublin", 35),
    IrishTown("Skerries", "Dublin", 30),
    IrishTown("Rush", "Dublin", 27),
    IrishTown("Donabate", "Dublin", 22),
    IrishTown("Rathfarnham", "Dublin", 7),
    IrishTown("Castleknock", "Dublin", 10),
    IrishTown("Raheny", "Dublin", 7),
    IrishTown("Clontarf", "Dublin", 5),
    IrishTown("Blackrock", "Dublin", 9),
    IrishTown("Stillorgan", "Dublin", 10),
    IrishTown("Santry", "Dublin", 7),
    IrishTown("Lusk", "Dublin", 25),
    IrishTown("Tyrrelstown", "Dublin", 14),

    # Cork (260 km)
    IrishTown("Cork", "Cork", 260),
    IrishTown("Cobh", "Cork", 275),
    IrishTown("Midleton", "Cork", 265),
    IrishTown("Mallow", "Cork", 240),
    IrishTown("Youghal", "Cork", 250),
    IrishTown("Bantry", "Cork", 340),
    IrishTown("Fermoy", "Cork", 230),
    IrishTown("Douglas", "Cork", 262),
    IrishTown("Ballincollig", "Cork", 265),
    IrishTown("Carrigaline", "Cork", 270),
    IrishTown("Kinsale", "Cork", 285),
    IrishTown("Bandon", "Cork", 290),
    IrishTown("Macroom", "Cork", 290),
    IrishTown("Clonakilty", "Cork", 315),
    IrishTown("Skibbereen", "Cork", 330),
    IrishTown("Charleville", "Cork", 215),
    IrishTown("Kanturk", "Cork", 260),

    # Galway (210 km)
    IrishTown("Galway", "Galway", 210),
    IrishTown("Tuam", "Galway", 225),
    IrishTown("Loughrea", "Galway", 190),
    IrishTown("Ballinasloe", "Galway", 160),
    IrishTown("Clifden", "Galway", 295),
    IrishTown("Oranmore", "Galway", 205),
    IrishTown("Athenry", "Galway", 200),
    IrishTown("Gort", "Galway", 200),
    IrishTown("Portumna", "Galway", 165),

    # Limerick (200 km)
    IrishTown("Limerick", "Limerick", 200),
    IrishTown("Newcastle West", "Limerick", 235),
    IrishTown("Adare", "Limerick", 215),
    IrishTown("Kilmallock", "Limerick", 210),
    IrishTown("Abbeyfeale", "Limerick", 260),

    # Waterford (165 km)
    IrishTown("Waterford", "Waterford", 165),
    IrishTown("Dungarvan", "Waterford", 200),
    IrishTown("Tramore", "Waterford", 175),
    IrishTown("Lismore", "Waterford", 215),

    # Kilkenny (130 km)
    IrishTown("Kilkenny", "Kilkenny", 130),
    IrishTown("Callan", "Kilkenny", 140),
    IrishTown("Thomastown", "Kilkenny", 140),
    IrishTown("Castlecomer", "Kilkenny", 115),

    # Wexford (150 km)
    IrishTown("Wexford", "Wexford", 150),
    IrishTown("Gorey", "Wexford", 100),
    IrishTown("Enniscorthy", "Wexford", 130),
    IrishTown("New Ross", "Wexford", 150),
    IrishTown("Bunclody", "Wexford", 115),

    # Wicklow (55 km)
    IrishTown("Wicklow", "Wicklow", 55),
    IrishTown("Arklow", "Wicklow", 75),
    IrishTown("Bray", "Wicklow", 22),
    IrishTown("Greystones", "Wicklow", 28),
    IrishTown("Blessington", "Wicklow", 35),
    IrishTown("Rathdrum", "Wicklow", 60),
    IrishTown("Baltinglass", "Wicklow", 65),

    # Kildare (50 km)
    IrishTown("Naas", "Kildare", 32),
    IrishTown("Newbridge", "Kildare", 48),
    IrishTown("Celbridge", "Kildare", 22),
    IrishTown("Leixlip", "Kildare", 18),
    IrishTown("Maynooth", "Kildare", 25),
    IrishTown("Athy", "Kildare", 78),
    IrishTown("Kildare", "Kildare", 55),
    IrishTown("Clane", "Kildare", 30),
    IrishTown("Kilcock", "Kildare", 28),
    IrishTown("Monasterevin", "Kildare", 65),
    IrishTown("Sallins", "Kildare", 33),
    IrishTown("Prosperous", "Kildare", 38),

    # Meath (50 km)
    IrishTown("Navan", "Meath", 50),
    IrishTown("Trim", "Meath", 55),
    IrishTown("Kells", "Meath", 65),
    IrishTown("Ashbourne", "Meath", 20),
    IrishTown("Dunboyne", "Meath", 18),
    IrishTown("Dunshaughlin", "Meath", 30),
    IrishTown("Enfield", "Meath", 40),
    IrishTown("Ratoath", "Meath", 22),
    IrishTown("Bettystown", "Meath", 42),
    IrishTown("Laytown", "Meath", 45),

    # Louth (80 km)
    IrishTown("Drogheda", "Louth", 50),
    IrishTown("Dundalk", "Louth", 85),
    IrishTown("Ardee", "Louth", 70),
    IrishTown("Carlingford", "Louth", 100),
    IrishTown("Dunleer", "Louth", 60),

    # Westmeath (100 km)
    IrishTown("Mullingar", "Westmeath", 80),
    IrishTown("Athlone", "Westmeath", 130),
    IrishTown("Moate", "Westmeath", 115),
    IrishTown("Kilbeggan", "Westmeath", 95),
    IrishTown("Castlepollard", "Westmeath", 95),

    # Offaly (110 km)
    IrishTown("Tullamore", "Offaly", 105),
    IrishTown("Birr", "Offaly", 140),
    IrishTown("Edenderry", "Offaly", 60),
    IrishTown("Clara", "Offaly", 110),
    IrishTown("Banagher", "Offaly", 145),

    # Laois (100 km)
    IrishTown("Portlaoise", "Laois", 90),
    IrishTown("Mountmellick", "Laois", 85),
    IrishTown("Portarlington", "Laois", 75),
    IrishTown("Mountrath", "Laois", 105),
    IrishTown("Abbeyleix", "Laois", 110),
    IrishTown("Rathdowney", "Laois", 120),
    IrishTown("Stradbally", "Laois", 95),

    # Longford (130 km)
    IrishTown("Longford", "Longford", 125),
    IrishTown("Ballymahon", "Longford", 130),
    IrishTown("Granard", "Longford", 115),
    IrishTown("Edgeworthstown", "Longford", 115),

    # Tipperary (175 km)
    IrishTown("Clonmel", "Tipperary", 170),
    IrishTown("Thurles", "Tipperary", 145),
    IrishTown("Nenagh", "Tipperary", 160),
    IrishTown("Tipperary", "Tipperary", 190),
    IrishTown("Cahir", "Tipperary", 185),
    IrishTown("Cashel", "Tipperary", 165),
    IrishTown("Roscrea", "Tipperary", 130),
    IrishTown("Carrick-on-Suir", "Tipperary", 170),
    IrishTown("Templemore", "Tipperary", 140),

    # Kerry (305 km)
    IrishTown("Tralee", "Kerry", 305),
    IrishTown("Killarney", "Kerry", 310),
    IrishTown("Kenmare", "Kerry", 340),
    IrishTown("Dingle", "Kerry", 350),
    IrishTown("Listowel", "Kerry", 285),
    IrishTown("Cahersiveen", "Kerry", 355),
    IrishTown("Killorglin", "Kerry", 320),
    IrishTown("Castleisland", "Kerry", 290),

    # Clare (230 km)
    IrishTown("Ennis", "Clare", 230),
    IrishTown("Shannon", "Clare", 220),
    IrishTown("Kilrush", "Clare", 270),
    IrishTown("Killaloe", "Clare", 170),
    IrishTown("Ennistymon", "Clare", 260),
    IrishTown("Scarriff", "Clare", 185),

    # Sligo (215 km)
    IrishTown("Sligo", "Sligo", 215),
    IrishTown("Ballymote", "Sligo", 230),
    IrishTown("Tobercurry", "Sligo", 240),
    IrishTown("Enniscrone", "Sligo", 255),
    IrishTown("Strandhill", "Sligo", 220),

    # Donegal (275 km)
    IrishTown("Letterkenny", "Donegal", 240),
    IrishTown("Donegal", "Donegal", 265),
    IrishTown("Bundoran", "Donegal", 255),
    IrishTown("Buncrana", "Donegal", 270),
    IrishTown("Ballyshannon", "Donegal", 255),
    IrishTown("Carndonagh", "Donegal", 290),
    IrishTown("Dunfanaghy", "Donegal", 285),
    IrishTown("Killybegs", "Donegal", 290),

    # Mayo (280 km)
    IrishTown("Castlebar", "Mayo", 265),
    IrishTown("Westport", "Mayo", 260),
    IrishTown("Ballina", "Mayo", 250),
    IrishTown("Belmullet", "Mayo", 320),
    IrishTown("Ballinrobe", "Mayo", 240),
    IrishTown("Claremorris", "Mayo", 235),
    IrishTown("Swinford", "Mayo", 245),
    IrishTown("Knock", "Mayo", 235),
    IrishTown("Foxford", "Mayo", 250),

    # Roscommon (190 km)
    IrishTown("Roscommon", "Roscommon", 160),
    IrishTown("Boyle", "Roscommon", 195),
    IrishTown("Castlerea", "Roscommon", 195),
    IrishTown("Strokestown", "Roscommon", 165),
    IrishTown("Ballaghaderreen", "Roscommon", 210),

    # Leitrim (235 km)
    IrishTown("Carrick-on-Shannon", "Leitrim", 160),
    IrishTown("Manorhamilton", "Leitrim", 220),
    IrishTown("Mohill", "Leitrim", 155),
    IrishTown("Drumshanbo", "Leitrim", 170),
    IrishTown("Ballinamore", "Leitrim", 165),

    # Cavan (130 km)
    IrishTown("Cavan", "Cavan", 115),
    IrishTown("Virginia", "Cavan", 90),
    IrishTown("Bailieborough", "Cavan", 100),
    IrishTown("Kingscourt", "Cavan", 85),
    IrishTown("Ballyconnell", "Cavan", 145),
    IrishTown("Cootehill", "Cavan", 120),
    IrishTown("Belturbet", "Cavan", 140),

    # Monaghan (130 km)
    IrishTown("Monaghan", "Monaghan", 130),
    IrishTown("Carrickmacross", "Monaghan", 95),
    IrishTown("Castleblayney", "Monaghan", 105),
    IrishTown("Clones", "Monaghan", 150),
    IrishTown("Ballybay", "Monaghan", 120),

    # Carlow (85 km)
    IrishTown("Carlow", "Carlow", 85),
    IrishTown("Tullow", "Carlow", 90),
    IrishTown("Muine Bheag", "Carlow", 100),
    IrishTown("Borris", "Carlow", 110),
    IrishTown("Hacketstown", "Carlow", 80),
)

# Bank-statement abbreviations that are not town names
LOCATION_ABBREVIATIONS: dict[str, str] = {
    "dub": "Dublin",
    "dubln": "Dublin",
    "crk": "Cork",
    "glwy": "Galway",
    "lmk": "Limerick",
    "waterfrd": "Waterford",
    "wford": "Waterford",
    "klkny": "Kilkenny",
    "wxford": "Wexford",
    "carrick": "Carrick-on-Shannon",
}

COUNTY_OF_TOWN: dict[str, str] = {town.name: town.county for town in IRISH_TOWNS}

COUNTIES: frozenset[str] = frozenset(COUNTY_OF_TOWN.values())

# Approximate one-way road km from Dublin to each county's main town
COUNTY_DISTANCE_FROM_DUBLIN: dict[str, int] = {
    "Dublin": 0,
    "Kildare": 50,
    "Meath": 50,
    "Wicklow": 55,
    "Louth": 80,
    "Westmeath": 100,
    "Laois": 100,
    "Offaly": 110,
    "Carlow": 85,
    "Kilkenny": 130,
    "Wexford": 150,
    "Waterford": 165,
    "Cork": 260,
    "Kerry": 305,
    "Limerick": 200,
    "Clare": 230,
    "Tipperary": 175,
    "Galway": 210,
    "Mayo": 280,
    "Roscommon": 190,
    "Sligo": 215,
    "Leitrim": 235,
    "Donegal": 275,
    "Cavan": 130,
    "Monaghan": 130,
    "Longford": 130,
}
