"""
counter-bridge 最小示例（离线、无 backend）。

用途：
- 展示 MonitoringInfo -> CounterUpdate 的完整路径（默认配置 + dispatcher）；
- 展示四个出口：成功 / shape 非法 / step 未解析 / 未知 urn；
- 把成功结果的 wire JSON 写入 workspace（供人工查看）。
"""

from __future__ import annotations

import argparse
from pathlib import Path

from counter_bridge.bootstrap import build_dispatcher, load_bridge_config
from counter_bridge.monitoring.coders import DistributionData, encode_int64_distribution
from counter_bridge.monitoring.contracts import Labels, MonitoringInfo, Urns
from counter_bridge.steps.naming import NameContext, StepNameTable


def main() -> int:
    """脚本入口：翻译几条示例记录并输出结果。"""

    parser = argparse.ArgumentParser(description="01_translate_minimal")
    parser.add_argument("--workspace-root", default=".", help="Workspace root path")
    parser.add_argument("--config", action="append", default=[], help="YAML overlay path (repeatable)")
    args = parser.parse_args()

    workspace_root = Path(args.workspace_root).resolve()
    workspace_root.mkdir(parents=True, exist_ok=True)

    config = load_bridge_config([Path(p) for p in args.config])
    steps = StepNameTable(
        {
            "ParDo(Parse)": NameContext(
                stage_name="F12",
                original_name="s3",
                system_name="Parse/ParDo",
                user_name="Parse",
            )
        }
    )
    dispatcher = build_dispatcher(config, step_names=steps)

    labels = {Labels.NAME: "latency_ms", Labels.NAMESPACE: "parse", Labels.PTRANSFORM: "ParDo(Parse)"}
    payload = encode_int64_distribution(DistributionData(count=4, sum=130, min=12, max=61))
    ok = dispatcher.translate(MonitoringInfo(urn=Urns.USER_DISTRIBUTION_INT64, labels=labels, payload=payload))
    assert ok is not None

    invalid = dispatcher.translate(MonitoringInfo(urn=Urns.USER_DISTRIBUTION_INT64, labels={Labels.NAME: "x"}))
    unresolved = dispatcher.translate(
        MonitoringInfo(urn=Urns.USER_DISTRIBUTION_INT64, labels={**labels, Labels.PTRANSFORM: "Fused(Step)"})
    )
    unknown = dispatcher.translate(MonitoringInfo(urn="beam:metric:custom:v1"))
    assert invalid is None and unresolved is None and unknown is None

    out = workspace_root / "counter_update.json"
    out.write_text(ok.to_json() + "\n", encoding="utf-8")
    print("[example] counter_update:")
    print(ok.to_json())
    print("EXAMPLE_OK: translate_minimal")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
