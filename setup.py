from setuptools import setup

package_name = 'octomap_to_gridmap'

setup(
    name=package_name,
    version='0.0.1',
    packages=[package_name],
    data_files=[
        ('share/ament_index/resource_index/packages',
         ['resource/' + package_name]),
        ('share/' + package_name, ['package.xml']),
        ('share/' + package_name + '/launch', ['launch/octomap_to_gridmap.launch.py']),
        ('share/' + package_name + '/config', ['config/topics.yaml']),
    ],
    install_requires=[
        'setuptools',
        'numpy',
        'PyYAML',
        'pyoctomap',
    ],
    extras_require={
        'test': ['pytest'],
    },
    zip_safe=True,
    maintainer='Minho Lee',
    maintainer_email='mhlee00@inha.edu',
    description='Project a binary OctoMap onto a 2D occupancy grid within a height band',
    license='MIT',
    tests_require=['pytest'],
    entry_points={
        'console_scripts': [
            'octomap_to_gridmap_node = octomap_to_gridmap.octomap_to_gridmap_node:main'
        ],
    },
)
