"""
Human-readable summaries of an optimization result.
"""


def get_recommendation(stats, target_upward_ratio, max_downward):
    """Pick a recommendation for the plan line from its statistics."""
    if stats['upward_ratio'] >= target_upward_ratio:
        return ("Target upward ratio achieved. "
                "The current plan line is recommended for use.")
    if stats['upward_ratio'] >= target_upward_ratio * 0.9:
        return ("Upward ratio is close to the target. "
                "Partial manual adjustment should reach it.")
    if stats['max_downward'] > max_downward:
        return ("Lowering exceeds the allowed limit. "
                "Review the restricted sections.")
    return ("Further optimization is required. "
            "Consider relaxing the movement constraints.")


def generate_report(result, target_upward_ratio, max_downward):
    """
    Build a formatted report dict from an optimization result.

    Parameters
    ----------
    result : dict
        Return value of ``UpwardPriorityOptimizer.optimize_plan_line``
    target_upward_ratio : float
    max_downward : float

    Returns
    -------
    dict
        ``summary``, ``statistics``, ``improvement`` (display strings) and
        ``recommendation``
    """
    stats = result['statistics']
    improvement = result.get('improvement', {'upward_ratio': 0.0, 'score': 0.0})

    return {
        'summary': {
            'optimized': result['converged'],
            'iterations': result['iterations'],
            'upward_ratio': f"{stats['upward_ratio'] * 100:.1f}%",
            'target_achieved': stats['upward_ratio'] >= target_upward_ratio,
        },
        'statistics': {
            'upward_points': stats['upward_points'],
            'downward_points': stats['downward_points'],
            'max_upward': f"{stats['max_upward']:.1f}mm",
            'max_downward': f"{stats['max_downward']:.1f}mm",
            'avg_upward': f"{stats['avg_upward']:.1f}mm",
            'avg_downward': f"{stats['avg_downward']:.1f}mm",
        },
        'improvement': {
            'upward_ratio_increase': f"{improvement['upward_ratio'] * 100:.1f}%",
            'score_increase': f"{improvement['score']:.2f}",
        },
        'recommendation': get_recommendation(stats, target_upward_ratio, max_downward),
    }


def format_report(report):
    """Render a report dict as plain text."""
    summary = report['summary']
    stats = report['statistics']
    improvement = report['improvement']

    lines = []
    lines.append("=== Upward Priority Optimization ===")
    lines.append(f"Converged = {summary['optimized']} after {summary['iterations']} iterations")
    lines.append(f"Upward ratio = {summary['upward_ratio']} "
                 f"(target {'achieved' if summary['target_achieved'] else 'not achieved'})")
    lines.append(f"Upward points = {stats['upward_points']}, downward points = {stats['downward_points']}")
    lines.append(f"Max lift = {stats['max_upward']}, max lowering = {stats['max_downward']}")
    lines.append(f"Avg lift = {stats['avg_upward']}, avg lowering = {stats['avg_downward']}")
    lines.append(f"Upward ratio increase = {improvement['upward_ratio_increase']}")
    lines.append(f"Score increase = {improvement['score_increase']}")
    lines.append(f"Recommendation: {report['recommendation']}")

    return '\n'.join(lines)
