from __future__ import annotations

import math

from .contracts import Unit, UnitTable, UnknownTableError

# Decimal (SI, 1000-based) and binary (IEC, 1024-based) units side by side.
DATA_STORAGE = UnitTable(
    name="data_storage",
    base_code="byte",
    units=(
        Unit("bit", "Bit (b)", 1 / 8),
        Unit("nibble", "Nibble", 0.5),
        Unit("byte", "Byte (B)", 1),
        Unit("kilobyte", "Kilobyte (KB)", 1e3),
        Unit("megabyte", "Megabyte (MB)", 1e6),
        Unit("gigabyte", "Gigabyte (GB)", 1e9),
        Unit("terabyte", "Terabyte (TB)", 1e12),
        Unit("petabyte", "Petabyte (PB)", 1e15),
        Unit("exabyte", "Exabyte (EB)", 1e18),
        Unit("zettabyte", "Zettabyte (ZB)", 1e21),
        Unit("yottabyte", "Yottabyte (YB)", 1e24),
        Unit("kibibyte", "Kibibyte (KiB)", 1024**1),
        Unit("mebibyte", "Mebibyte (MiB)", 1024**2),
        Unit("gibibyte", "Gibibyte (GiB)", 1024**3),
        Unit("tebibyte", "Tebibyte (TiB)", 1024**4),
        Unit("pebibyte", "Pebibyte (PiB)", 1024**5),
        Unit("exbibyte", "Exbibyte (EiB)", 1024**6),
        Unit("zebibyte", "Zebibyte (ZiB)", 1024**7),
        Unit("yobibyte", "Yobibyte (YiB)", 1024**8),
    ),
)

LENGTH = UnitTable(
    name="length",
    base_code="meter",
    units=(
        Unit("nanometer", "Nanometer (nm)", 1e-9),
        Unit("micrometer", "Micrometer (µm)", 1e-6),
        Unit("millimeter", "Millimeter (mm)", 0.001),
        Unit("centimeter", "Centimeter (cm)", 0.01),
        Unit("decimeter", "Decimeter (dm)", 0.1),
        Unit("meter", "Meter (m)", 1),
        Unit("kilometer", "Kilometer (km)", 1000),
        Unit("inch", "Inch (in)", 0.0254),
        Unit("foot", "Foot (ft)", 0.3048),
        Unit("yard", "Yard (yd)", 0.9144),
        Unit("mile", "Mile (mi)", 1609.344),
        Unit("nauticalMile", "Nautical Mile (nmi)", 1852),
        Unit("lightYear", "Light Year (ly)", 9.461e15),
        Unit("astronomicalUnit", "Astronomical Unit (AU)", 1.496e11),
        Unit("parsec", "Parsec (pc)", 3.086e16),
    ),
)

AREA = UnitTable(
    name="area",
    base_code="squareMeter",
    units=(
        Unit("squareMillimeter", "Square Millimeter (mm²)", 1e-6),
        Unit("squareCentimeter", "Square Centimeter (cm²)", 1e-4),
        Unit("squareMeter", "Square Meter (m²)", 1),
        Unit("squareKilometer", "Square Kilometer (km²)", 1e6),
        Unit("hectare", "Hectare (ha)", 1e4),
        Unit("are", "Are (a)", 100),
        Unit("squareInch", "Square Inch (in²)", 0.00064516),
        Unit("squareFoot", "Square Foot (ft²)", 0.092903),
        Unit("squareYard", "Square Yard (yd²)", 0.836127),
        Unit("acre", "Acre", 4046.86),
        Unit("squareMile", "Square Mile (mi²)", 2589988.11),
    ),
)

VOLUME = UnitTable(
    name="volume",
    base_code="liter",
    units=(
        Unit("milliliter", "Milliliter (mL)", 0.001),
        Unit("liter", "Liter (L)", 1),
        Unit("cubicMeter", "Cubic Meter (m³)", 1000),
        Unit("cubicCentimeter", "Cubic Centimeter (cm³)", 0.001),
        Unit("cubicDecimeter", "Cubic Decimeter (dm³)", 1),
        Unit("teaspoon", "Teaspoon (tsp)", 0.00492892),
        Unit("tablespoon", "Tablespoon (tbsp)", 0.0147868),
        Unit("usFluidOunce", "US Fluid Ounce (fl oz)", 0.0295735),
        Unit("usCup", "US Cup (cup)", 0.236588),
        Unit("usPint", "US Pint (pt)", 0.473176),
        Unit("usQuart", "US Quart (qt)", 0.946353),
        Unit("usGallon", "US Gallon (gal)", 3.78541),
        Unit("usBarrel", "US Barrel (bbl)", 119.24),
        Unit("cubicInch", "Cubic Inch (in³)", 0.0163871),
        Unit("cubicFoot", "Cubic Foot (ft³)", 28.3168),
        Unit("cubicYard", "Cubic Yard (yd³)", 764.555),
        Unit("imperialFluidOunce", "Imperial Fluid Ounce (fl oz UK)", 0.0284131),
        Unit("imperialCup", "Imperial Cup (cup UK)", 0.284131),
        Unit("imperialPint", "Imperial Pint (pt UK)", 0.568261),
        Unit("imperialQuart", "Imperial Quart (qt UK)", 1.13652),
        Unit("imperialGallon", "Imperial Gallon (gal UK)", 4.54609),
    ),
)

SPEED = UnitTable(
    name="speed",
    base_code="meterPerSecond",
    units=(
        Unit("meterPerSecond", "Meter per Second (m/s)", 1),
        Unit("kilometerPerHour", "Kilometer per Hour (km/h)", 1000 / 3600),
        Unit("milePerHour", "Mile per Hour (mph)", 1609.344 / 3600),
        Unit("footPerSecond", "Foot per Second (ft/s)", 0.3048),
        Unit("knot", "Knot (kn)", 1852 / 3600),
        Unit("nauticalMilePerHour", "Nautical Mile per Hour", 1852 / 3600),
        Unit("kilometerPerSecond", "Kilometer per Second (km/s)", 1000),
        Unit("milePerSecond", "Mile per Second (mi/s)", 1609.344),
        Unit("footPerMinute", "Foot per Minute (ft/min)", 0.3048 / 60),
        Unit("inchPerSecond", "Inch per Second (in/s)", 0.0254),
        Unit("yardPerSecond", "Yard per Second (yd/s)", 0.9144),
        Unit("mach", "Mach (at sea level)", 343),
        Unit("speedOfLight", "Speed of Light (c)", 299792458),
    ),
)

POWER = UnitTable(
    name="power",
    base_code="watt",
    units=(
        Unit("milliwatt", "Milliwatt (mW)", 0.001),
        Unit("watt", "Watt (W)", 1),
        Unit("kilowatt", "Kilowatt (kW)", 1e3),
        Unit("megawatt", "Megawatt (MW)", 1e6),
        Unit("gigawatt", "Gigawatt (GW)", 1e9),
        Unit("horsepower", "Horsepower (hp)", 745.699872),
        Unit("metricHorsepower", "Metric Horsepower (PS)", 735.49875),
        Unit("btuPerHour", "BTU per Hour (BTU/h)", 0.29307107),
        Unit("footPoundPerSecond", "Foot-Pound per Second (ft·lbf/s)", 1.355817948),
        Unit("caloriePerSecond", "Calorie per Second (cal/s)", 4.184),
    ),
)

PRESSURE = UnitTable(
    name="pressure",
    base_code="pascal",
    units=(
        Unit("pascal", "Pascal (Pa)", 1),
        Unit("kilopascal", "Kilopascal (kPa)", 1e3),
        Unit("megapascal", "Megapascal (MPa)", 1e6),
        Unit("bar", "Bar (bar)", 1e5),
        Unit("millibar", "Millibar (mbar)", 100),
        Unit("hectopascal", "Hectopascal (hPa)", 100),
        Unit("atm", "Atmosphere (atm)", 101325),
        Unit("technicalAtmosphere", "Technical Atmosphere (at)", 98066.5),
        Unit("psi", "Pounds per Square Inch (psi)", 6894.76),
        Unit("psf", "Pounds per Square Foot (psf)", 47.8803),
        Unit("torr", "Torr (torr)", 133.322),
        Unit("millimeterOfMercury", "Millimeter of Mercury (mmHg)", 133.322),
        Unit("inchOfMercury", "Inch of Mercury (inHg)", 3386.39),
        Unit("inchOfWater", "Inch of Water (inH2O)", 249.089),
        Unit("millimeterOfWater", "Millimeter of Water (mmH2O)", 9.80665),
    ),
)

PLANE_ANGLE = UnitTable(
    name="plane_angle",
    base_code="radian",
    units=(
        Unit("degree", "Degree (°)", math.pi / 180),
        Unit("radian", "Radian (rad)", 1),
        Unit("gradian", "Gradian (grad)", math.pi / 200),
        Unit("minuteOfArc", "Minute of Arc (')", math.pi / (180 * 60)),
        Unit("secondOfArc", 'Second of Arc (")', math.pi / (180 * 3600)),
        Unit("milliradian", "Milliradian (mrad)", 0.001),
        Unit("turn", "Turn/Revolution", 2 * math.pi),
        Unit("quadrant", "Quadrant", math.pi / 2),
        Unit("sextant", "Sextant", math.pi / 3),
        Unit("octant", "Octant", math.pi / 4),
    ),
)

_TABLES: dict[str, UnitTable] = {
    t.name: t
    for t in (DATA_STORAGE, LENGTH, AREA, VOLUME, SPEED, POWER, PRESSURE, PLANE_ANGLE)
}


def list_tables() -> list[str]:
    return sorted(_TABLES)


def get_table(name: str) -> UnitTable:
    try:
        return _TABLES[name]
    except KeyError:
        raise UnknownTableError(
            f"Unknown unit table {name!r} (expected one of: {', '.join(list_tables())})"
        ) from None
