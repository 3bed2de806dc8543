"""Shared fixtures: reference decimal expansion of e."""

import pytest

# Первые 1001 цифра e (целая часть + 1000 дробных), без десятичной точки
E_REFERENCE_DIGITS = (
    "2"
    "7182818284590452353602874713526624977572470936999595749669676277240766303535475945713821785251664274"
    "2746639193200305992181741359662904357290033429526059563073813232862794349076323382988075319525101901"
    "1573834187930702154089149934884167509244761460668082264800168477411853742345442437107539077744992069"
    "5517027618386062613313845830007520449338265602976067371132007093287091274437470472306969772093101416"
    "9283681902551510865746377211125238978442505695369677078544996996794686445490598793163688923009879312"
    "7736178215424999229576351482208269895193668033182528869398496465105820939239829488793320362509443117"
    "3012381970684161403970198376793206832823764648042953118023287825098194558153017567173613320698112509"
    "9618188159304169035159888851934580727386673858942287922849989208680582574927961048419844436346324496"
    "8487560233624827041978623209002160990235304369941849146314093431738143640546253152096183690888707016"
    "7683964243781405927145635490613031072085103837505101157477041718986106873969655212671546889570350354"
)


@pytest.fixture
def e_reference() -> str:
    """Эталонные цифры e (строка "27182818...")."""
    return E_REFERENCE_DIGITS


@pytest.fixture
def e_reference_digits(e_reference):
    """Эталонные цифры e как список int."""
    return [int(ch) for ch in e_reference]
