import time
import timeit
import numpy as np
from keychord.recognition import recognize
from keychord.naming import format_match

def run_benchmark():
    # Setup
    np.random.seed(42)
    # 20,000 random voicings of 1-6 keys across the piano range
    sizes = np.random.randint(1, 7, size=20000)
    voicings = [list(np.random.randint(21, 109, size=n)) for n in sizes]

    # Pre-warm
    recognize(voicings[0])

    # Benchmark
    start_time = time.perf_counter()
    for notes in voicings:
        matches = recognize(notes)
        if matches:
            format_match(matches[0], notes)
    end_time = time.perf_counter()

    duration = end_time - start_time
    print(f"Benchmark duration: {duration:.4f} seconds ({duration / len(voicings) * 1e6:.1f} µs per call)")

    setup = """
from keychord.recognition import recognize
    """

    stmt = """
recognize([60, 64, 67])
recognize([64, 67, 72])
recognize([48, 58, 62, 64, 67])
recognize([60, 65])
    """

    times = timeit.repeat(stmt, setup, number=2000, repeat=5)
    print(f"Baseline (min of 5 runs, 2000 loops each): {min(times):.5f} seconds")

if __name__ == '__main__':
    run_benchmark()
