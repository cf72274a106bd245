import argparse

from itinerary_agent import configure_logging, export_csv, export_json, format_currency, plan_trip


def demo():
    ap = argparse.ArgumentParser(description="生成每日行程并导出预算表")
    ap.add_argument("destination", nargs="?", default="Yogyakarta")
    ap.add_argument("duration", nargs="?", type=int, default=3)
    ap.add_argument("interests", nargs="?", default="budaya, kuliner, candi")
    ap.add_argument("--budget", type=float, default=None)
    args = ap.parse_args()

    configure_logging()
    result = plan_trip(args.destination, args.duration, args.interests, args.budget)

    print("==== 详细日程 ====")
    for day in result["itinerary"]:
        print(f"Day {day['day']}: {day['date']}")
        for a in day["activities"]:
            print(f"  - {a['name']} | {a['openingHours']} | {a['estimatedCost']}")
    print("\n==== 预算汇总 ====")
    budget = result["budget"]
    print("预估合计:", format_currency(budget["totalEstimated"]))
    print("剩余预算:", format_currency(budget["remaining"]))
    print("日均剩余:", format_currency(budget["averageDailyRemaining"]))
    print("\n==== 引用来源 ====")
    for c in result["citations"]:
        source = c.get("web") or c.get("maps") or {}
        print(source.get("title"), source.get("uri"))

    export_json(result, "output_itinerary.json")
    export_csv(result, "output_budget.csv")
    print("\n已导出: output_itinerary.json, output_budget.csv")


if __name__ == "__main__":
    demo()
