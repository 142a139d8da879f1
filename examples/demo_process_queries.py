from pypowergrid import process_queries

connections = [(1, 2), (2, 3), (3, 4), (4, 5)]
queries = [(1, 3), (2, 1), (1, 1), (2, 2), (1, 2)]
print(process_queries(5, connections, queries))

connections = [(2, 4), (1, 2), (5, 4), (4, 6), (2, 6), (3, 6), (4, 1)]
queries = [(1, 1), (2, 1), (2, 6), (1, 6), (1, 3), (2, 2), (1, 2), (2, 4), (1, 5)]
print(process_queries(6, connections, queries, traversal="bfs"))
