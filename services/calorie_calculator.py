"""Energy needs from body measurements (Mifflin-St Jeor)."""

from datetime import date

from domain.enums import CalorieStatus, Gender

# moderate activity
ACTIVITY_FACTOR = 1.55
# a day within this many kcal of the recommendation is on track
TOLERANCE_KCAL = 200


def age_on(date_of_birth: date, today: date) -> int:
    """Completed years between ``date_of_birth`` and ``today``"""
    years = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        years -= 1
    return years


def calculate_bmr(age: int, gender: Gender, weight: float, height: float) -> int:
    """
    Basal metabolic rate in kcal/day.

    10 x weight(kg) + 6.25 x height(cm) - 5 x age, then +5 for men and -161
    otherwise.
    """
    bmr = 10 * weight + 6.25 * height - 5 * age
    bmr += 5 if Gender(gender) == Gender.MALE else -161
    return round(bmr)


def daily_calories(bmr: int) -> int:
    return round(bmr * ACTIVITY_FACTOR)


def calorie_status(consumed: int, recommended: int) -> CalorieStatus:
    diff = consumed - recommended
    if abs(diff) <= TOLERANCE_KCAL:
        return CalorieStatus.GOOD
    return CalorieStatus.OVER if diff > 0 else CalorieStatus.UNDER
