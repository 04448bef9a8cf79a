from setuptools import setup, find_packages

setup(
    name="sudoku-solver",
    version="1.0.0",
    description="Sudoku Puzzle Solver & Unique-Solution Generator",
    author="robomotic",
    packages=find_packages(include=["sudoku_solver", "sudoku_solver.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.21.0",
        "matplotlib>=3.5.0",
        "tqdm>=4.62.0",
    ],
    extras_require={
        "dev": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "sudoku=sudoku_solver.cli:main",
            "sudoku-solve=sudoku_solver.cli:solve_main",
            "sudoku-generate=sudoku_solver.cli:generate_main",
        ],
    },
)
