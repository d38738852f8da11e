"""
Human-readable summaries of prepared inputs.
"""

from .prepare import InputBundle


def summarize_input(bundle: InputBundle) -> dict:
    """
    Summarize a prepared input bundle.

    Returns:
        Dict with:
            - from / to: First and last simulated month ("YYYY-MM")
            - n_months: Number of simulated months
            - species: Species ids in table order
            - thinning_events: Dict mapping species to number of thinnings
            - overridden_settings: Settings that differ from the defaults
            - extra_settings: Unrecognized settings keys that were passed
    """
    counts = bundle.thinning.groupby("species").size().to_dict()
    return {
        "from": str(bundle.site.from_month),
        "to": str(bundle.site.to_month),
        "n_months": bundle.site.n_months,
        "species": list(bundle.species_names),
        "thinning_events": {sp: int(counts.get(sp, 0)) for sp in bundle.species_names},
        "overridden_settings": bundle.settings.overridden(),
        "extra_settings": sorted(bundle.settings.extra),
    }


def print_input_report(bundle: InputBundle) -> None:
    """
    Print a human-readable report of a prepared input bundle.

    Args:
        bundle: Bundle from prepare_input()
    """
    summary = summarize_input(bundle)

    print("\n3-PG Input Report:")
    print(f"  Period:     {summary['from']} to {summary['to']}")
    print(f"  Months:     {summary['n_months']}")
    print(f"  Species:    {len(summary['species'])}")

    for sp in summary["species"]:
        print(f"    {sp}: {summary['thinning_events'][sp]} thinning(s)")

    overridden = summary["overridden_settings"]
    if overridden:
        print("\n  Settings changed from defaults:")
        for key, value in overridden.items():
            print(f"    {key} = {value}")

    if summary["extra_settings"]:
        print(f"\n  Unknown settings: {', '.join(summary['extra_settings'])}")
