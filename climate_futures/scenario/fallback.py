"""Keyword fallback - pre-authored scenarios for when the AI is unreachable.

An ordered table of :class:`FallbackRule` entries maps keyword sets to
static scenario records. The lower-cased user input is tested against
each rule in order and the first rule with a matching keyword wins.
Input that matches no rule raises :class:`NoFallbackMatch`; there is no
generic catch-all scenario.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from climate_futures.scenario.models import AltForecast, ScenarioDraft
from climate_futures.utils import NoFallbackMatch


@dataclass(frozen=True)
class FallbackRule:
    name: str
    keywords: tuple[str, ...]
    build: Callable[[], ScenarioDraft]

    def matches(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)


def _energy() -> ScenarioDraft:
    return ScenarioDraft(
        theme="A fusion-powered renaissance reshaping civilization's energy landscape",
        alt_forecasts=AltForecast(
            global_temp_2100=1.8,
            death_toll_annual=180_000,
            refugees=12_000_000,
            arable_land_loss_percent=8,
            population=9.8e9,
            biodiversity_loss_percent=22,
            gdp_loss_percent=3,
        ),
        narrative=(
            "Commercial fusion arrived sooner than anyone planned. The breakthrough came from "
            "AI-assisted plasma control and new superconducting magnets rather than a single "
            "flagship reactor, and by the early 2030s compact plants were replacing coal and gas "
            "units on their old grid connections.\n\n"
            "Cheap, clean power reshaped the map. Coastal desalination turned dry regions into "
            "farmland, heavy industry electrified, and emissions fell by roughly 40% within a "
            "decade. Fossil-fuel economies, meanwhile, went through a hard and uneven collapse.\n\n"
            "By 2100 warming settled at 1.8°C above pre-industrial levels. That is still dangerous, "
            "but it is manageable. Abundant energy also brought new habits of consumption and waste, "
            "and the century's lesson was that a technological breakthrough buys time rather than "
            "solving the social side of the crisis."
        ),
    )


def _decarbonization() -> ScenarioDraft:
    return ScenarioDraft(
        theme="A rapid decarbonization drive that rebuilds global infrastructure in a single generation",
        alt_forecasts=AltForecast(
            global_temp_2100=2.2,
            death_toll_annual=250_000,
            refugees=15_000_000,
            arable_land_loss_percent=12,
            population=9.5e9,
            biodiversity_loss_percent=28,
            gdp_loss_percent=5,
        ),
        narrative=(
            "Net-zero pledges stopped being slogans once carbon border taxes made dirty exports "
            "unsellable. Solar and wind became the backbone of most grids by 2040, and combustion "
            "vehicles disappeared from city centers soon after.\n\n"
            "The transition demanded huge up-front investment and produced millions of jobs in "
            "installation, storage and grid work. Mining regions for lithium and copper carried "
            "much of the environmental cost.\n\n"
            "Warming stabilized at 2.2°C by 2100: above the Paris goal, far below the worst "
            "pathways. Adaptation remained the defining challenge for the most exposed nations."
        ),
    )


def _geoengineering() -> ScenarioDraft:
    return ScenarioDraft(
        theme="A world where climate engineering becomes mainstream, for better or worse",
        alt_forecasts=AltForecast(
            global_temp_2100=1.9,
            death_toll_annual=200_000,
            refugees=10_000_000,
            arable_land_loss_percent=10,
            population=9.3e9,
            biodiversity_loss_percent=30,
            gdp_loss_percent=6,
        ),
        narrative=(
            "When mitigation fell short, a coalition of states began stratospheric aerosol "
            "injection in 2040. Global temperatures responded within a few years.\n\n"
            "Regional rainfall shifted in ways the models had only hinted at. Monsoon failures "
            "in South Asia became diplomatic crises, and the question of who controls the "
            "global thermostat dominated international politics for decades.\n\n"
            "By 2100 warming held at 1.9°C, but the aerosols could never safely be switched off. "
            "Humanity had traded one risk for a permanent dependency."
        ),
    )


def _hero() -> ScenarioDraft:
    return ScenarioDraft(
        theme="A superhero's climate intervention that saves the planet and leaves humanity dependent on it",
        alt_forecasts=AltForecast(
            global_temp_2100=1.8,
            death_toll_annual=180_000,
            refugees=12_000_000,
            arable_land_loss_percent=8,
            population=9.3e9,
            biodiversity_loss_percent=25,
            gdp_loss_percent=4,
        ),
        narrative=(
            "The hero's first act was to redirect storm tracks away from flooded deltas. Within "
            "months extreme weather eased and public opinion crowned a new climate champion.\n\n"
            "The rescue had costs. Communities waited for the next intervention instead of "
            "building defenses, governments competed for the hero's attention, and engineered "
            "microclimates produced ecosystems that could not survive without constant help.\n\n"
            "By 2100 a joint institute coordinated superhuman and human efforts. Warming held at "
            "1.8°C, and the lasting lesson was that no single ally can replace collective action."
        ),
    )


def _time_travel() -> ScenarioDraft:
    return ScenarioDraft(
        theme="A temporal paradox where past interventions rewrite the climate timeline and unleash new chaos",
        alt_forecasts=AltForecast(
            global_temp_2100=1.5,
            carbon_emissions_2100=6.2,
            sea_level_rise_2100=0.72,
            death_toll_annual=150_000,
            refugees=8_000_000,
            arable_land_loss_percent=6,
            population=9.2e9,
            biodiversity_loss_percent=18,
            gdp_loss_percent=2,
        ),
        narrative=(
            "In 2030 the first stable time machine sent engineers back to seed clean-energy "
            "technology decades before its invention. The altered timeline arrived all at once, "
            "and emissions fell by 60% by 2040.\n\n"
            "Repeated edits left scars. Chrono-storms, where past and present weather patterns "
            "collided, brought monsoon rain to the Sahara and drought to the Amazon.\n\n"
            "Warming stayed near 1.5°C by 2100, but a permanent institute now watches the "
            "timeline for further damage. The most durable solutions turned out to be the ones "
            "built in the present."
        ),
    )


def _alien() -> ScenarioDraft:
    return ScenarioDraft(
        theme="An alien intervention that restores Earth's climate while testing humanity's independence",
        alt_forecasts=AltForecast(
            global_temp_2100=1.2,
            carbon_emissions_2100=4.8,
            sea_level_rise_2100=0.58,
            death_toll_annual=120_000,
            refugees=6_000_000,
            arable_land_loss_percent=4,
            population=9.8e9,
            biodiversity_loss_percent=15,
            gdp_loss_percent=3,
        ),
        narrative=(
            "A visiting civilization that had survived its own climate crisis arrived in 2027 with "
            "orbital scrubbers that pulled greenhouse gases from the upper atmosphere.\n\n"
            "Their terraforming organisms restored degraded land but also spread in ways no one "
            "could predict. Alien blooms crowded out native plants in some regions, and the "
            "technology transfer made Earth's economy dependent on visitors it did not understand.\n\n"
            "By 2100 warming was held at 1.2°C, the lowest of any pathway. It was achieved by "
            "others, and a generation of engineers worked to make sure the next rescue would be "
            "humanity's own."
        ),
    )


FALLBACK_RULES: tuple[FallbackRule, ...] = (
    FallbackRule("energy", ("fusion", "energy", "nuclear"), _energy),
    FallbackRule("decarbonization", ("net-zero", "net zero", "emissions", "carbon"), _decarbonization),
    FallbackRule("geoengineering", ("geoengineering", "climate engineering"), _geoengineering),
    FallbackRule("hero", ("superman", "superhero", "hero"), _hero),
    FallbackRule("time_travel", ("time travel", "time machine"), _time_travel),
    FallbackRule("alien", ("alien", "extraterrestrial", "ufo"), _alien),
)


def match_rule(user_input: str, rules: tuple[FallbackRule, ...] = FALLBACK_RULES) -> FallbackRule | None:
    text = user_input.lower()
    return next((rule for rule in rules if rule.matches(text)), None)


def fallback_scenario(user_input: str, rules: tuple[FallbackRule, ...] = FALLBACK_RULES) -> ScenarioDraft:
    """Return the pre-authored scenario for the first matching rule."""
    rule = match_rule(user_input, rules)
    if rule is None:
        raise NoFallbackMatch(user_input)
    return rule.build().model_copy(update={"user_input": user_input})
