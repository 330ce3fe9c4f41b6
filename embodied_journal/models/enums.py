from enum import Enum


class IdentityState(str, Enum):
    fearful_beginner = "fearful_beginner"
    confident_professional = "confident_professional"
    impatient_gambler = "impatient_gambler"
    disciplined_trader = "disciplined_trader"
    revenge_trader = "revenge_trader"


class NervousSystemState(str, Enum):
    fight_flight = "fight_flight"
    calm_confidence = "calm_confidence"


IDENTITY_LABELS = {
    IdentityState.fearful_beginner.value: "Fearful Beginner",
    IdentityState.confident_professional.value: "Confident Professional",
    IdentityState.impatient_gambler.value: "Impatient Gambler",
    IdentityState.disciplined_trader.value: "Disciplined Trader",
    IdentityState.revenge_trader.value: "Revenge Trader",
}

NERVOUS_SYSTEM_LABELS = {
    NervousSystemState.fight_flight.value: "Fight/Flight",
    NervousSystemState.calm_confidence.value: "Calm Confidence",
}
