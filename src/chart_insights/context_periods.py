"""ECB policy eras used to annotate the combined policy-rate chart.

Each entry spans an inclusive ``YYYY-MM`` range.  Adjacent eras may share
their boundary month.
"""

from __future__ import annotations

from chart_insights.models import ContextPeriod

CONTEXT_PERIODS: tuple[ContextPeriod, ...] = (
    ContextPeriod(
        label="1999–2001: The Beginning & Euro Stabilization",
        start="1999-01",
        end="2001-12",
        description=(
            "Interest rates were roughly between 2.5% and 4.75%.\n\n"
            "The ECB raised rates to support the newly introduced euro and to "
            "control potential inflation.\n\n"
            "Economic growth was solid, so higher rates helped prevent the "
            "economy from overheating."
        ),
    ),
    ContextPeriod(
        label="2001–2003: Economic Slowdown (Dot-com crash, 9/11)",
        start="2001-12",
        end="2003-12",
        description=(
            "The economy slowed sharply due to the dot-com bubble bursting and "
            "the shock of 9/11.\n\n"
            "The ECB responded by cutting rates aggressively: the main "
            "refinancing rate (MRR) fell to around 2%, the marginal lending "
            "rate (MLR) to about 3%, and the deposit facility rate (DFR) to "
            "roughly 1%.\n\n"
            "Lower rates made borrowing cheaper, encouraging consumption and "
            "investment to counteract the recession."
        ),
    ),
    ContextPeriod(
        label="2005–2008: Economic Boom & Rising Inflation",
        start="2005-01",
        end="2008-12",
        description=(
            "The economy recovered and grew strongly, pushing inflation "
            "higher.\n\n"
            "To prevent overheating, the ECB raised rates again: MRR to 4.25%, "
            "MLR to 5%, DFR around 3.25%.\n\n"
            "This pre-crisis tightening aimed to slow down inflation without "
            "triggering a recession."
        ),
    ),
    ContextPeriod(
        label="2008–2012: Financial Crisis & Extreme Rate Cuts",
        start="2008-12",
        end="2012-01",
        description=(
            "The global financial crisis caused severe recession and economic "
            "uncertainty.\n\n"
            "The ECB slashed interest rates: MRR dropped from 4.25% to 1%.\n\n"
            "A brief rate hike in 2011 was quickly reversed, showing the ECB's "
            "struggle between controlling inflation and supporting a "
            "collapsing economy."
        ),
    ),
    ContextPeriod(
        label="2012–2016: Negative Rates & Unconventional Policies",
        start="2012-01",
        end="2016-12",
        description=(
            "Deposit rates went negative (–0.1% to –0.4%), meaning banks were "
            "effectively penalized for holding money at the ECB rather than "
            "lending it.\n\n"
            "The MRR eventually reached 0%.\n\n"
            "These measures aimed to fight deflation, stimulate lending, and "
            "boost a stagnating economy."
        ),
    ),
    ContextPeriod(
        label="2016–2021: Long Period of Ultra-Low Rates",
        start="2016-12",
        end="2021-12",
        description=(
            "Rates remained very low: DFR around –0.5%, MRR at 0%.\n\n"
            "The ECB tried to revive growth during a prolonged period of weak "
            "inflation and slow recovery, often using quantitative easing "
            "alongside low rates."
        ),
    ),
    ContextPeriod(
        label="2022–2023: Post-COVID Inflation Shock",
        start="2022-01",
        end="2023-12",
        description=(
            "After the pandemic, inflation surged to 8–10%, far above the "
            "ECB's 2% target.\n\n"
            "The ECB implemented its fastest rate hikes ever: MRR rose from 0% "
            "to around 4%, deposit rates from –0.5% to ~3.75%, and MLR to "
            "~4.5%.\n\n"
            "The aim was to quickly reduce inflation and stabilize prices."
        ),
    ),
    ContextPeriod(
        label="2024–2025: Slight Rate Cuts",
        start="2024-01",
        end="2025-06",
        description=(
            "As inflation begins to decline, the ECB starts cutting rates "
            "slightly.\n\n"
            "This indicates a focus on a soft landing, slowing down the "
            "economy gently without triggering a new recession."
        ),
    ),
)
